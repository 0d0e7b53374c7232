"""Post-related Pydantic schemas."""

from pydantic import BaseModel, Field

from jointsgalore.models.post import Comment, Post


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    comment: str = Field("", max_length=2000, description="Comment text")


class CommentResult(BaseModel):
    """Result of a comment submission; ``comment`` is null when it was blank."""

    comment: Comment | None


class LikeResult(BaseModel):
    """State of a post after a like toggle."""

    post_id: int
    likes: int
    liked: bool


class RandomPost(BaseModel):
    """Random pick; ``post`` is null when nothing has been uploaded yet."""

    post: Post | None
