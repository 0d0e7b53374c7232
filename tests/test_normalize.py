"""Tests for lazy schema normalisation of stored documents."""

import copy

import pytest

from jointsgalore.db.normalize import load_posts, load_users, normalize_posts, normalize_users
from jointsgalore.db.store import DocumentStore
from jointsgalore.models.post import DEFAULT_TITLE


def test_users_missing_fields_are_backfilled() -> None:
    users, touched = normalize_users([{"username": "old", "passwordPlain": "pw"}])

    assert touched == 1
    user = users[0]
    assert isinstance(user["joinedAt"], int) and user["joinedAt"] > 0
    assert user["isAdmin"] is False
    assert user["banned"] is False
    assert user["followers"] == []
    assert user["following"] == []


def test_users_malformed_fields_are_replaced() -> None:
    users, touched = normalize_users(
        [
            {
                "username": "odd",
                "joinedAt": 5,
                "isAdmin": "yes",
                "banned": 0,
                "followers": "bob",
                "following": ["bob", "bob", "carol"],
            }
        ]
    )

    assert touched == 1
    assert users[0]["isAdmin"] is False
    assert users[0]["banned"] is False
    assert users[0]["followers"] == []
    assert users[0]["following"] == ["bob", "carol"]
    assert users[0]["joinedAt"] == 5


def test_posts_are_backfilled_and_likes_resynced() -> None:
    posts, touched = normalize_posts(
        [
            {"id": 1, "author": "a", "createdAt": 1},
            {"id": 2, "author": "a", "createdAt": 2, "likes": "3", "likedBy": ["x", "x"], "comments": None},
            {"id": 3, "author": "a", "createdAt": 3, "likes": 7, "likedBy": ["x"], "comments": []},
        ]
    )

    assert touched == 3
    assert posts[0]["likes"] == 0 and posts[0]["likedBy"] == [] and posts[0]["comments"] == []
    assert posts[1]["likes"] == 1 and posts[1]["likedBy"] == ["x"] and posts[1]["comments"] == []
    assert posts[2]["likes"] == 1


def test_posts_missing_timestamp_and_text_fields() -> None:
    posts, touched = normalize_posts([{"id": 1, "author": "a", "imageFilename": "x.png"}])

    assert touched == 1
    assert posts[0]["createdAt"] == 1
    assert posts[0]["title"] == DEFAULT_TITLE
    assert posts[0]["caption"] == ""
    assert posts[0]["imageFilename"] == "x.png"


def test_comments_are_backfilled() -> None:
    posts, _ = normalize_posts(
        [{"id": 9, "createdAt": 9, "comments": [{"id": 4, "author": "b", "text": "hi"}, "junk", {"id": 5}]}]
    )

    assert posts[0]["comments"] == [
        {"id": 4, "author": "b", "text": "hi", "createdAt": 4},
        {"id": 5, "author": "", "text": "", "createdAt": 5},
    ]


@pytest.mark.parametrize("joined_at", ["2023-01-01", None, True, 1.5, 0])
def test_non_integer_joined_at_is_replaced(joined_at) -> None:
    users, touched = normalize_users([{"username": "old", "joinedAt": joined_at}])

    assert touched == 1
    assert type(users[0]["joinedAt"]) is int and users[0]["joinedAt"] > 0


def test_boolean_likes_are_not_numeric() -> None:
    posts, _ = normalize_posts([{"id": 1, "likes": True, "likedBy": [], "comments": []}])
    assert posts[0]["likes"] == 0


def test_normalisation_is_idempotent() -> None:
    users, _ = normalize_users([{"username": "old", "joinedAt": "2023-01-01", "email": None}])
    posts, _ = normalize_posts([{"id": 1, "likedBy": ["x"], "comments": [{"id": 2, "text": "t"}]}])

    users_again, users_touched = normalize_users(copy.deepcopy(users))
    posts_again, posts_touched = normalize_posts(copy.deepcopy(posts))

    assert users_touched == 0 and users_again == users
    assert posts_touched == 0 and posts_again == posts


def test_load_persists_fix_up_immediately(store: DocumentStore) -> None:
    store.save("users", [{"username": "legacy", "passwordPlain": "pw"}])

    load_users(store, "users")

    on_disk = store.load("users")[0]
    assert on_disk["followers"] == [] and on_disk["banned"] is False


def test_load_of_clean_collection_does_not_save(store: DocumentStore, mocker) -> None:
    store.save(
        "posts",
        [
            {
                "id": 1,
                "title": "t",
                "caption": "",
                "imageFilename": "a.png",
                "createdAt": 1,
                "likes": 0,
                "likedBy": [],
                "comments": [],
            }
        ],
    )
    save = mocker.spy(store, "save")

    load_posts(store, "posts")
    load_posts(store, "posts")

    save.assert_not_called()


def test_load_of_dirty_collection_saves_once(store: DocumentStore, mocker) -> None:
    store.save("posts", [{"id": 1}])
    save = mocker.spy(store, "save")

    load_posts(store, "posts")
    load_posts(store, "posts")

    assert save.call_count == 1
