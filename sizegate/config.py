"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .middleware.content_limit import SizeLimitConfig


class Settings(BaseSettings):
    """Runtime settings loaded from env/.env with validation."""

    # ── Core ─────────────────────────────────────
    app_name: str = "SizeGate"
    app_environment: str = "local"
    listen_host: str = "0.0.0.0"
    listen_port: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix="SIZEGATE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Limits ────────────────────────────────────────────────────────────────
    # Maximum declared Content-Length in bytes; 0 or negative disables the check
    content_length_limit: int = 65536

    # Honour X-Forwarded-For when logging client IPs
    trust_forwarded_for: bool = True

    # Logging level
    log_level: str = "INFO"

    # Reduce noisy logs from random scanners
    suppress_access_logs: bool = False
    suppress_404_logs: bool = True
    suppress_invalid_http_warnings: bool = True

    # ── Validators ────────────────────────────────────────────────────────────
    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = (value or "").strip().upper()
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
        return level if level in valid else "INFO"

    def size_limit(self) -> SizeLimitConfig:
        """Return the immutable size limit handed to the gate."""
        return SizeLimitConfig(content_length_limit=self.content_length_limit)


# Cached settings instance
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance (validates env on first call)."""
    return Settings()
