"""Tests for the user repository."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from jointsgalore.core.errors import (
    BannedError,
    DuplicateUsernameError,
    InvalidCredentialError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from jointsgalore.db.store import DocumentStore
from jointsgalore.models.user import User
from jointsgalore.repositories import UserRepository


def test_first_user_becomes_admin(users: UserRepository) -> None:
    alice = users.register("alice", "a@example.com", "pw")
    bob = users.register("bob", None, "pw")

    assert alice.is_admin is True
    assert bob.is_admin is False
    assert users.find_by_username("alice").is_admin is True
    assert users.find_by_username("bob").email == ""


def test_register_rejects_duplicate_username(users: UserRepository, alice: User) -> None:
    with pytest.raises(DuplicateUsernameError):
        users.register("alice", "", "other")


def test_register_is_case_sensitive(users: UserRepository, alice: User) -> None:
    users.register("Alice", "", "pw")
    assert {u.username for u in users.list_all()} == {"alice", "Alice"}


@pytest.mark.parametrize("username, credential", [("", "pw"), ("   ", "pw"), ("dave", "")])
def test_register_requires_username_and_credential(users: UserRepository, username, credential) -> None:
    with pytest.raises(ValidationError):
        users.register(username, "", credential)


def test_register_writes_canonical_document(users: UserRepository, store: DocumentStore) -> None:
    users.register("alice", "a@example.com", "pw")

    doc = store.load("users")[0]
    assert doc["username"] == "alice"
    assert doc["passwordPlain"] == "pw"
    assert doc["isAdmin"] is True
    assert doc["banned"] is False
    assert doc["followers"] == [] and doc["following"] == []
    assert isinstance(doc["joinedAt"], int)


def test_authenticate(users: UserRepository, alice: User) -> None:
    assert users.authenticate("alice", "alice-pw").username == "alice"

    with pytest.raises(InvalidCredentialError):
        users.authenticate("alice", "wrong")
    with pytest.raises(InvalidCredentialError):
        users.authenticate("nobody", "alice-pw")


def test_ban_blocks_login_distinctly(users: UserRepository, bob: User) -> None:
    users.set_banned("bob", True)

    with pytest.raises(BannedError):
        users.authenticate("bob", "bob-pw")
    with pytest.raises(InvalidCredentialError):
        users.authenticate("bob", "wrong")

    users.set_banned("bob", False)
    assert users.authenticate("bob", "bob-pw").banned is False


def test_ban_and_promote_unknown_user_raise(users: UserRepository, alice: User) -> None:
    with pytest.raises(NotFoundError):
        users.set_banned("ghost", True)
    with pytest.raises(NotFoundError):
        users.promote_to_admin("ghost")


def test_promote_to_admin(users: UserRepository, bob: User) -> None:
    assert users.promote_to_admin("bob").is_admin is True
    assert users.find_by_username("bob").is_admin is True


def test_find_by_username_unknown(users: UserRepository) -> None:
    with pytest.raises(NotFoundError):
        users.find_by_username("ghost")
    assert users.get("ghost") is None


def test_follow_and_unfollow_are_symmetric(users: UserRepository, carol: User) -> None:
    users.follow("alice", "bob")

    alice = users.find_by_username("alice")
    bob = users.find_by_username("bob")
    assert "bob" in alice.following and "alice" in bob.followers
    assert alice.followers == [] and bob.following == []

    users.unfollow("alice", "bob")

    alice = users.find_by_username("alice")
    bob = users.find_by_username("bob")
    assert "bob" not in alice.following and "alice" not in bob.followers


def test_follow_is_idempotent(users: UserRepository, bob: User) -> None:
    users.follow("alice", "bob")
    users.follow("alice", "bob")

    assert users.find_by_username("alice").following == ["bob"]
    assert users.find_by_username("bob").followers == ["alice"]


def test_unfollow_absent_edge_is_noop(users: UserRepository, bob: User) -> None:
    users.unfollow("alice", "bob")
    assert users.find_by_username("alice").following == []


def test_self_follow_is_noop(users: UserRepository, alice: User, store: DocumentStore) -> None:
    before = store.load("users")
    users.follow("alice", "alice")
    users.unfollow("alice", "alice")
    assert store.load("users") == before


def test_follow_unknown_user_raises(users: UserRepository, alice: User) -> None:
    with pytest.raises(NotFoundError):
        users.follow("alice", "ghost")
    with pytest.raises(NotFoundError):
        users.unfollow("ghost", "alice")


def test_symmetry_holds_across_many_edges(users: UserRepository, carol: User) -> None:
    users.follow("alice", "bob")
    users.follow("bob", "carol")
    users.follow("carol", "alice")
    users.follow("bob", "alice")
    users.unfollow("carol", "alice")

    everyone = {u.username: u for u in users.list_all()}
    for a in everyone.values():
        for b in everyone.values():
            assert (a.username in b.followers) == (b.username in a.following)


def test_legacy_records_load(users: UserRepository, store: DocumentStore) -> None:
    store.save("users", [{"username": "old", "passwordPlain": "pw", "theme": "dark"}])

    user = users.authenticate("old", "pw")

    assert user.followers == [] and user.is_admin is False
    users.follow("old", "old")
    users.register("new", "", "pw")
    assert store.load("users")[0]["theme"] == "dark"


def test_string_joined_at_does_not_block_login(users: UserRepository, store: DocumentStore) -> None:
    store.save("users", [{"username": "old", "passwordPlain": "pw", "joinedAt": "2023-01-01"}])

    user = users.authenticate("old", "pw")

    assert isinstance(user.joined_at, int) and user.joined_at > 0
    assert isinstance(store.load("users")[0]["joinedAt"], int)


def test_unrecoverable_user_raises_storage_error(users: UserRepository, store: DocumentStore) -> None:
    store.save("users", [{"passwordPlain": "pw"}])

    with pytest.raises(StorageError):
        users.authenticate("old", "pw")


def test_concurrent_follows_keep_graph_symmetric(users: UserRepository) -> None:
    workers = 20
    users.register("target", "", "pw")
    for i in range(workers):
        users.register(f"u{i}", "", "pw")
    barrier = threading.Barrier(workers)

    def follow(i: int) -> None:
        barrier.wait()
        users.follow(f"u{i}", "target")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(follow, range(workers)))

    everyone = {u.username: u for u in users.list_all()}
    assert sorted(everyone["target"].followers) == sorted(f"u{i}" for i in range(workers))
    for i in range(workers):
        assert everyone[f"u{i}"].following == ["target"]
