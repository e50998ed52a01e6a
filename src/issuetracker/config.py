"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_DATABASE_URL = "sqlite:///issuetracker.db"
DEFAULT_API_BASE = "http://localhost:8000/api"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    """Issue Tracker settings.

    Every field has an ``ISSUETRACKER_*`` environment variable counterpart;
    see :meth:`from_env`.
    """

    database_url: str = DEFAULT_DATABASE_URL
    api_base: str = DEFAULT_API_BASE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_dir: str = "logs"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``ISSUETRACKER_*`` environment variables."""
        origins = os.environ.get("ISSUETRACKER_CORS_ORIGINS", "*")
        return cls(
            database_url=os.environ.get("ISSUETRACKER_DATABASE_URL", DEFAULT_DATABASE_URL),
            api_base=os.environ.get("ISSUETRACKER_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            host=os.environ.get("ISSUETRACKER_HOST", DEFAULT_HOST),
            port=_env_int("ISSUETRACKER_PORT", DEFAULT_PORT),
            log_dir=os.environ.get("ISSUETRACKER_LOG_DIR", "logs"),
            log_level=os.environ.get("ISSUETRACKER_LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
