"""
Configuration helpers for the Ideaboard backend.

Settings are read once from the environment; tests reset them with
``get_settings.cache_clear()``.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    database_url: str
    public_dir: Path
    log_level: str

    @property
    def storage_backend(self) -> str:
        """``"sql"`` when a database is configured, ``"json"`` otherwise."""
        return "sql" if self.database_url else "json"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=Path(os.getenv("IDEAS_DATA_DIR") or "data").expanduser(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        public_dir=Path(os.getenv("PUBLIC_DIR") or "public").expanduser(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
