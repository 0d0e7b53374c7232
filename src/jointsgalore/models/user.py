"""Pydantic model for documents in the user collection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PublicUser(BaseModel):
    """User record without the credential, safe to hand to presentation."""

    username: str
    email: str = ""
    joined_at: int = Field(alias="joinedAt")
    is_admin: bool = Field(default=False, alias="isAdmin")
    banned: bool = False
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class User(BaseModel):
    """Identity and social-graph node keyed by ``username``.

    ``followers`` and ``following`` are stored as arrays but behave as sets.
    The credential lives under the legacy ``passwordPlain`` key.
    """

    username: str
    email: str = ""
    credential: str | None = Field(default=None, alias="passwordPlain")
    joined_at: int = Field(alias="joinedAt")
    is_admin: bool = Field(default=False, alias="isAdmin")
    banned: bool = False
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("followers", "following")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def to_document(self) -> dict[str, object]:
        """Serialise back to the on-disk shape."""
        return self.model_dump(by_alias=True)

    def to_public(self) -> PublicUser:
        """Return the presentation view of this user."""
        return PublicUser.model_validate(self.model_dump(exclude={"credential"}))
