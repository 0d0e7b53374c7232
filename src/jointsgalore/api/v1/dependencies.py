"""Shared API dependencies for authentication and repository access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jointsgalore.core.security import decode_access_token
from jointsgalore.core.settings import settings
from jointsgalore.db import DocumentStore, get_store
from jointsgalore.models.user import User
from jointsgalore.repositories import PostRepository, UserRepository

# HTTP Bearer scheme carrying the session token
bearer_scheme = HTTPBearer(auto_error=False)

StoreDep = Annotated[DocumentStore, Depends(get_store)]


def get_user_repo(store: StoreDep) -> UserRepository:
    """Return a user repository over the shared store."""
    return UserRepository(store, settings.users_collection)


def get_post_repo(store: StoreDep) -> PostRepository:
    """Return a post repository over the shared store."""
    return PostRepository(store, settings.posts_collection)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repo)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    users: UserRepoDep,
) -> User:
    """Resolve the session token to an active user.

    Raises:
        HTTPException: 401 if the token is missing, invalid or names an
            unknown user; 403 if the account is banned.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    username = decode_access_token(credentials.credentials)
    user = users.get(username) if username else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    if user.banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been banned.",
        )
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(user: CurrentUserDep) -> User:
    """Allow only administrators through."""
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admins only.")
    return user


AdminDep = Annotated[User, Depends(require_admin)]
