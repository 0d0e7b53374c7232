"""Admin panel schemas."""

from pydantic import BaseModel

from jointsgalore.models.post import Post
from jointsgalore.models.user import PublicUser


class AdminOverview(BaseModel):
    """Every user and every post, for moderation."""

    users: list[PublicUser]
    posts: list[Post]
