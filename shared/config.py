"""
Shared configuration management for the token service.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenSettings(BaseSettings):
    """Token issuing and validation settings, read from ``TOKEN_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Signing
    default_algorithm: str = Field(default="HS256")
    min_key_length: int = Field(default=8, ge=1)

    # Validation
    leeway_seconds: int = Field(default=0, ge=0)
    expected_issuer: Optional[str] = Field(default=None)
    expected_audience: Optional[str] = Field(default=None)
    verify_signature: bool = Field(default=True)
    check_expiration: bool = Field(default=True)
    check_not_before: bool = Field(default=True)
    check_issued_at: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_config() -> TokenSettings:
    """Get the process-wide token settings."""
    return TokenSettings()
