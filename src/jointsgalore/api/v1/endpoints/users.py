"""Profile and follow endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from jointsgalore.models.user import PublicUser
from jointsgalore.services.profile import Profile, build_profile

from ..dependencies import CurrentUserDep, PostRepoDep, UserRepoDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=Profile)
def get_profile(username: str, users: UserRepoDep, posts: PostRepoDep) -> Profile:
    """Return a user's public profile with their joints and counters."""
    return build_profile(users, posts, username)


@router.post("/{username}/follow", response_model=PublicUser)
def follow(username: str, me: CurrentUserDep, users: UserRepoDep) -> PublicUser:
    """Follow ``username``; following yourself does nothing."""
    users.follow(me.username, username)
    return users.find_by_username(username).to_public()


@router.post("/{username}/unfollow", response_model=PublicUser)
def unfollow(username: str, me: CurrentUserDep, users: UserRepoDep) -> PublicUser:
    """Stop following ``username``."""
    users.unfollow(me.username, username)
    return users.find_by_username(username).to_public()
