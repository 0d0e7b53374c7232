# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from jointsgalore.core.security import create_access_token
from jointsgalore.core.settings import settings
from jointsgalore.db import DocumentStore, get_store
from jointsgalore.main import app as fastapi_app
from jointsgalore.models.post import Post
from jointsgalore.models.user import User
from jointsgalore.repositories import PostRepository, UserRepository


@pytest.fixture()
def store(tmp_path: Path) -> DocumentStore:
    """Provide a document store rooted in a per-test directory."""
    return DocumentStore(tmp_path / "data")


@pytest.fixture()
def users(store: DocumentStore) -> UserRepository:
    return UserRepository(store, "users")


@pytest.fixture()
def posts(store: DocumentStore) -> PostRepository:
    return PostRepository(store, "posts")


@pytest.fixture()
def alice(users: UserRepository) -> User:
    """First registered user, therefore an admin."""
    return users.register("alice", "alice@example.com", "alice-pw")


@pytest.fixture()
def bob(users: UserRepository, alice: User) -> User:
    return users.register("bob", "", "bob-pw")


@pytest.fixture()
def carol(users: UserRepository, bob: User) -> User:
    return users.register("carol", None, "carol-pw")


@pytest.fixture()
def alice_post(posts: PostRepository, alice: User) -> Post:
    return posts.create(author="alice", title="Sunset", caption="golden hour", image_filename="sunset.jpg")


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI, store: DocumentStore, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """HTTP client wired to the per-test store and upload directory."""
    monkeypatch.setattr(settings, "upload_dir", tmp_path / "uploads")
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a factory building bearer headers for a username."""

    def _headers(username: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(username)}"}

    return _headers
