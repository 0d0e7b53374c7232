"""Flat-file persistence: the document store and schema normalisation."""

from functools import lru_cache

from jointsgalore.core.settings import settings

from .normalize import load_posts, load_users, normalize_posts, normalize_users
from .store import Document, DocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "get_store",
    "load_posts",
    "load_users",
    "normalize_posts",
    "normalize_users",
]


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    """Return the process-wide store rooted at the configured data directory."""
    store = DocumentStore(settings.data_dir)
    store.ensure(settings.users_collection)
    store.ensure(settings.posts_collection)
    return store
