"""Administrator endpoints for moderation."""

from __future__ import annotations

from fastapi import APIRouter, status

from jointsgalore.models.user import PublicUser
from jointsgalore.schemas.admin import AdminOverview

from ..dependencies import AdminDep, PostRepoDep, UserRepoDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_model=AdminOverview)
def overview(admin: AdminDep, users: UserRepoDep, posts: PostRepoDep) -> AdminOverview:
    """List every user and every post."""
    return AdminOverview(
        users=[user.to_public() for user in users.list_all()],
        posts=posts.list_all(),
    )


@router.post("/posts/{post_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_any_post(post_id: int, admin: AdminDep, posts: PostRepoDep) -> None:
    """Delete a post regardless of who uploaded it."""
    posts.admin_delete(post_id)


@router.post("/users/{username}/ban", response_model=PublicUser)
def ban(username: str, admin: AdminDep, users: UserRepoDep) -> PublicUser:
    """Block a user from logging in."""
    return users.set_banned(username, True).to_public()


@router.post("/users/{username}/unban", response_model=PublicUser)
def unban(username: str, admin: AdminDep, users: UserRepoDep) -> PublicUser:
    """Lift a ban."""
    return users.set_banned(username, False).to_public()


@router.post("/users/{username}/make-admin", response_model=PublicUser)
def make_admin(username: str, admin: AdminDep, users: UserRepoDep) -> PublicUser:
    """Grant administrator rights."""
    return users.promote_to_admin(username).to_public()
