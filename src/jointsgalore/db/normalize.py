"""Backfill legacy or partially written documents to the canonical shape.

The store has no migration tooling, so every load passes through these
functions before business logic sees a document. The ``normalize_*``
functions are pure; ``load_users``/``load_posts`` persist a fix-up
immediately when anything changed.
"""

from __future__ import annotations

import logging

from jointsgalore.db.store import Document, DocumentStore
from jointsgalore.db.time import now_ms
from jointsgalore.models.post import DEFAULT_TITLE

__all__ = [
    "normalize_users",
    "normalize_posts",
    "load_users",
    "load_posts",
]

logger = logging.getLogger(__name__)


def _unique(values: list[object]) -> list[object]:
    seen: list[object] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _normalize_set(doc: Document, key: str) -> bool:
    value = doc.get(key)
    if not isinstance(value, list):
        doc[key] = []
        return True
    deduped = _unique(value)
    if len(deduped) != len(value):
        doc[key] = deduped
        return True
    return False


def _normalize_flag(doc: Document, key: str) -> bool:
    if isinstance(doc.get(key), bool):
        return False
    doc[key] = False
    return True


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _normalize_text(doc: Document, key: str, default: str) -> bool:
    if isinstance(doc.get(key), str):
        return False
    doc[key] = default
    return True


def _normalize_created_at(doc: Document) -> bool:
    # legacy records may lack a timestamp; the id was derived from it
    if _is_int(doc.get("createdAt")):
        return False
    doc["createdAt"] = doc["id"] if _is_int(doc.get("id")) else now_ms()
    return True


def _normalize_comments(post: Document) -> bool:
    comments = post.get("comments")
    if not isinstance(comments, list):
        post["comments"] = []
        return True
    kept = [comment for comment in comments if isinstance(comment, dict)]
    changed = len(kept) != len(comments)
    for comment in kept:
        changed |= _normalize_created_at(comment)
        changed |= _normalize_text(comment, "author", "")
        changed |= _normalize_text(comment, "text", "")
    if changed:
        post["comments"] = kept
    return changed


def normalize_users(users: list[Document]) -> tuple[list[Document], int]:
    """Return ``users`` backfilled in place and the number of records touched."""
    touched = 0
    for user in users:
        changed = False
        if not _is_int(user.get("joinedAt")) or not user["joinedAt"]:
            user["joinedAt"] = now_ms()
            changed = True
        changed |= _normalize_text(user, "email", "")
        changed |= _normalize_flag(user, "isAdmin")
        changed |= _normalize_flag(user, "banned")
        changed |= _normalize_set(user, "followers")
        changed |= _normalize_set(user, "following")
        touched += changed
    return users, touched


def normalize_posts(posts: list[Document]) -> tuple[list[Document], int]:
    """Return ``posts`` backfilled in place and the number of records touched.

    ``likes`` is kept equal to ``len(likedBy)``.
    """
    touched = 0
    for post in posts:
        changed = _normalize_created_at(post)
        changed |= _normalize_text(post, "title", DEFAULT_TITLE)
        changed |= _normalize_text(post, "caption", "")
        changed |= _normalize_text(post, "imageFilename", "")
        likes = post.get("likes")
        if isinstance(likes, bool) or not isinstance(likes, int | float):
            post["likes"] = 0
            changed = True
        changed |= _normalize_set(post, "likedBy")
        changed |= _normalize_comments(post)
        if post["likes"] != len(post["likedBy"]):
            post["likes"] = len(post["likedBy"])
            changed = True
        touched += changed
    return posts, touched


def load_users(store: DocumentStore, name: str) -> list[Document]:
    """Load and normalise the user collection, saving any fix-up."""
    with store.locked(name):
        users, touched = normalize_users(store.load(name))
        if touched:
            logger.info("Backfilled %d user record(s) in %s", touched, name)
            store.save(name, users)
        return users


def load_posts(store: DocumentStore, name: str) -> list[Document]:
    """Load and normalise the post collection, saving any fix-up."""
    with store.locked(name):
        posts, touched = normalize_posts(store.load(name))
        if touched:
            logger.info("Backfilled %d post record(s) in %s", touched, name)
            store.save(name, posts)
        return posts
