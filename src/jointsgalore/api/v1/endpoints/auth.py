"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from jointsgalore.core.security import create_access_token
from jointsgalore.schemas.user import LoginRequest, LoginResponse, RegisterRequest

from ..dependencies import UserRepoDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, users: UserRepoDep) -> LoginResponse:
    """Create an account and start a session for it.

    The first account ever created is an administrator.
    """
    user = users.register(payload.username, payload.email, payload.password)
    return LoginResponse(
        access_token=create_access_token(user.username),
        username=user.username,
        is_admin=user.is_admin,
    )


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, users: UserRepoDep) -> LoginResponse:
    """Exchange a username and password for a session token."""
    user = users.authenticate(payload.username, payload.password)
    return LoginResponse(
        access_token=create_access_token(user.username),
        username=user.username,
        is_admin=user.is_admin,
    )
