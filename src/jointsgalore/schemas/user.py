"""User-related Pydantic schemas."""

from pydantic import BaseModel, Field, model_validator


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique account name")
    email: str | None = Field(None, description="Optional contact address")
    password: str = Field(..., min_length=1, description="Account credential")
    password2: str = Field(..., min_length=1, description="Credential confirmation")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.password2:
            raise ValueError("Passwords do not match.")
        return self


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Response returned after successful login or registration."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    username: str
    is_admin: bool
