"""Document models for the persisted collections."""

from .post import Comment, Post
from .user import PublicUser, User

__all__ = ["Comment", "Post", "PublicUser", "User"]
