"""Profile summaries combining a user record with their posts."""
from __future__ import annotations

from pydantic import BaseModel

from jointsgalore.models.post import Post
from jointsgalore.models.user import PublicUser
from jointsgalore.repositories.post_repo import PostRepository
from jointsgalore.repositories.user_repo import UserRepository
from jointsgalore.services.feed import sort_recent


class Profile(BaseModel):
    """Everything a profile page shows about one user."""

    user: PublicUser
    posts: list[Post]
    total_posts: int
    total_likes: int
    followers_count: int
    following_count: int


def build_profile(users: UserRepository, posts: PostRepository, username: str) -> Profile:
    """Return the profile of ``username``.

    Raises:
        NotFoundError: If the user does not exist.
    """
    user = users.find_by_username(username)
    authored = sort_recent(posts.list_by_author(username))
    return Profile(
        user=user.to_public(),
        posts=authored,
        total_posts=len(authored),
        total_likes=sum(post.likes for post in authored),
        followers_count=len(user.followers),
        following_count=len(user.following),
    )
