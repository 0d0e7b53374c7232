"""Data access helpers for working with users."""
from __future__ import annotations

import logging

import pydantic

from jointsgalore.core.errors import (
    BannedError,
    DuplicateUsernameError,
    InvalidCredentialError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from jointsgalore.core.security import credentials_match
from jointsgalore.db.normalize import load_users
from jointsgalore.db.store import DocumentStore
from jointsgalore.db.time import now_ms
from jointsgalore.models.user import User

__all__ = ["UserRepository", "first_user_is_admin"]

logger = logging.getLogger(__name__)


def first_user_is_admin(existing: list[User]) -> bool:
    """Admin policy for registration: only the very first account is elevated."""
    return not existing


class UserRepository:
    """User collection access: registration, login checks and the follow graph.

    Every mutation runs one load, normalise, mutate, save cycle while
    holding the collection lock.
    """

    def __init__(self, store: DocumentStore, collection: str = "users") -> None:
        """Initialize the repository over ``collection`` in ``store``."""
        self.store = store
        self.collection = collection

    def _load(self) -> list[User]:
        docs = load_users(self.store, self.collection)
        try:
            return [User.model_validate(doc) for doc in docs]
        except pydantic.ValidationError as exc:
            logger.error("Unreadable document in %s: %s", self.collection, exc)
            raise StorageError(self.collection, f"malformed user document: {exc}") from exc

    def _save(self, users: list[User]) -> None:
        self.store.save(self.collection, [user.to_document() for user in users])

    @staticmethod
    def _find(users: list[User], username: str) -> User | None:
        return next((user for user in users if user.username == username), None)

    def _require(self, users: list[User], username: str) -> User:
        user = self._find(users, username)
        if user is None:
            raise NotFoundError("user", username)
        return user

    def list_all(self) -> list[User]:
        """Return every user in storage order."""
        return self._load()

    def get(self, username: str) -> User | None:
        """Return the user named ``username`` or ``None``."""
        return self._find(self._load(), username)

    def find_by_username(self, username: str) -> User:
        """Return the user named ``username``.

        Raises:
            NotFoundError: If no such user exists.
        """
        return self._require(self._load(), username)

    def register(self, username: str, email: str | None, credential: str) -> User:
        """Create a new account.

        The first account ever registered becomes an administrator.

        Raises:
            ValidationError: If the username or credential is blank.
            DuplicateUsernameError: If the username is already taken
                (case-sensitive).
        """
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not credential:
            raise ValidationError("Password is required")

        with self.store.locked(self.collection):
            users = self._load()
            if self._find(users, username) is not None:
                raise DuplicateUsernameError(username)

            user = User(
                username=username,
                email=email or "",
                credential=credential,
                joined_at=now_ms(),
                is_admin=first_user_is_admin(users),
            )
            users.append(user)
            self._save(users)

        logger.info("Registered user %s (admin=%s)", username, user.is_admin)
        return user

    def authenticate(self, username: str, credential: str) -> User:
        """Return the user if ``credential`` matches and the account is active.

        Raises:
            InvalidCredentialError: Unknown username or wrong credential.
            BannedError: Correct credential for a banned account.
        """
        user = self.get(username)
        if user is None or not credentials_match(user.credential, credential):
            raise InvalidCredentialError("Invalid username or password.")
        if user.banned:
            raise BannedError("Your account has been banned.")
        return user

    def follow(self, follower_name: str, target_name: str) -> None:
        """Make ``follower_name`` follow ``target_name``.

        Following yourself is a no-op, as is following someone twice.

        Raises:
            NotFoundError: If either user does not exist.
        """
        if follower_name == target_name:
            return

        with self.store.locked(self.collection):
            users = self._load()
            follower = self._require(users, follower_name)
            target = self._require(users, target_name)

            changed = False
            if target_name not in follower.following:
                follower.following.append(target_name)
                changed = True
            if follower_name not in target.followers:
                target.followers.append(follower_name)
                changed = True
            if changed:
                self._save(users)

    def unfollow(self, follower_name: str, target_name: str) -> None:
        """Remove the follow edge between the two users, if any.

        Raises:
            NotFoundError: If either user does not exist.
        """
        if follower_name == target_name:
            return

        with self.store.locked(self.collection):
            users = self._load()
            follower = self._require(users, follower_name)
            target = self._require(users, target_name)

            changed = False
            if target_name in follower.following:
                follower.following.remove(target_name)
                changed = True
            if follower_name in target.followers:
                target.followers.remove(follower_name)
                changed = True
            if changed:
                self._save(users)

    def set_banned(self, username: str, banned: bool) -> User:
        """Ban or unban ``username``.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self.store.locked(self.collection):
            users = self._load()
            user = self._require(users, username)
            user.banned = banned
            self._save(users)
        logger.info("User %s banned=%s", username, banned)
        return user

    def promote_to_admin(self, username: str) -> User:
        """Grant administrator rights to ``username``.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self.store.locked(self.collection):
            users = self._load()
            user = self._require(users, username)
            user.is_admin = True
            self._save(users)
        logger.info("User %s promoted to admin", username)
        return user
