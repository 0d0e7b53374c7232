"""Repositories over the flat-file user and post collections."""

from .pagination import Page, paginate
from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = ["Page", "PostRepository", "UserRepository", "paginate"]
