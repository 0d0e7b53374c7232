"""Exception hierarchy shared by the store, repositories and API layer."""

from __future__ import annotations

__all__ = [
    "JointsError",
    "DomainError",
    "NotFoundError",
    "ForbiddenError",
    "DuplicateUsernameError",
    "InvalidCredentialError",
    "BannedError",
    "ValidationError",
    "StorageError",
]


class JointsError(Exception):
    """Base class for every error raised by this package."""


class DomainError(JointsError):
    """Expected, recoverable outcome of a repository operation.

    Callers are meant to catch these and present a message; they never
    indicate lost or corrupted state.
    """


class NotFoundError(DomainError):
    """Raised when the addressed user, post or comment does not exist."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} not found: {key!r}")
        self.kind = kind
        self.key = key


class ForbiddenError(DomainError):
    """Raised when the actor is known but may not perform the mutation."""


class DuplicateUsernameError(DomainError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username!r}")
        self.username = username


class InvalidCredentialError(DomainError):
    """Raised when a username/credential pair does not match."""


class BannedError(DomainError):
    """Raised when a banned account tries to authenticate."""


class ValidationError(DomainError):
    """Raised when required text is missing or blank."""


class StorageError(JointsError):
    """Raised when a collection cannot be read from or written to disk.

    Deliberately not a ``DomainError``: there is no way to continue an
    operation without durable state.
    """

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(f"{collection}: {message}")
        self.collection = collection
