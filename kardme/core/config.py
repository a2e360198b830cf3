"""
Configuration helpers for the Kardme backend.

Routers/services read the typed Settings below instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    log_level: str
    rate_limit_writes: int
    rate_limit_window_seconds: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "https://kardme.com").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./kardme.db"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        rate_limit_writes=_int(os.getenv("RATE_LIMIT_WRITES", "30"), 30),
        rate_limit_window_seconds=_int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"), 60),
    )
