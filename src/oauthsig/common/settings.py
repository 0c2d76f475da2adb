"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTHSIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )

    # Signing
    default_signature_method: str = Field(
        default="HMAC-SHA1",
        description="Signature method used when a message does not name one",
    )

    # HTTP verification
    realm: str | None = Field(
        default=None,
        description="Realm reported in WWW-Authenticate challenges",
    )
    verify_exempt_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Request paths the signature middleware does not verify",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
