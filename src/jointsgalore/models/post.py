"""Pydantic models for documents in the post collection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TITLE = "Untitled Joint"


class Comment(BaseModel):
    """A comment appended to a post."""

    id: int
    author: str
    text: str
    created_at: int = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Post(BaseModel):
    """An uploaded image plus its engagement state."""

    id: int
    title: str = ""
    caption: str = ""
    image_filename: str = Field(default="", alias="imageFilename")
    author: str
    created_at: int = Field(alias="createdAt")
    likes: int = 0
    liked_by: list[str] = Field(default_factory=list, alias="likedBy")
    comments: list[Comment] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("liked_by")
    @classmethod
    def _dedupe_liked_by(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _sync_likes(self) -> Post:
        # likes always mirrors the likedBy set
        self.likes = len(self.liked_by)
        return self

    def find_comment(self, comment_id: int) -> Comment | None:
        """Return the comment with ``comment_id`` or ``None``."""
        return next((c for c in self.comments if c.id == comment_id), None)

    def to_document(self) -> dict[str, object]:
        """Serialise back to the on-disk shape."""
        return self.model_dump(by_alias=True)
