"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support. Only the
composition root (``core.container``) reads these values; services receive
plain constructor arguments.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="EOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    database_url: str = "sqlite:///./data/execution_os.db"
    # Total characters across all collections; 0 disables the check.
    # Mirrors the ~5MB budget a browser gives localStorage.
    storage_quota_chars: int = 5_000_000

    # Limits
    max_attachment_bytes: int = 500 * 1024
    avoidance_threshold_days: int = 3

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    logs_dir: str = "logs"

    @field_validator("storage_quota_chars", "max_attachment_bytes", "avoidance_threshold_days")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{v}'")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
