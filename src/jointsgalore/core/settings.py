"""Application settings and configuration.

This module defines all configuration options for the JointsGalore application.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="JointsGalore", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Session tokens
    secret_key: str = Field(
        default="replace_this_with_a_long_random_string",
        alias="SECRET_KEY",
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Flat-file storage
    data_dir: Path = Field(default=Path("data"), alias="DATA_DIR")
    users_collection: str = Field(default="users", alias="USERS_COLLECTION")
    posts_collection: str = Field(default="posts", alias="POSTS_COLLECTION")
    upload_dir: Path = Field(default=Path("public") / "uploads", alias="UPLOAD_DIR")

    # Feed presentation
    posts_per_page: int = Field(default=5, ge=1, alias="POSTS_PER_PAGE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )


settings = Settings()
