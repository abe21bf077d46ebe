"""
Configuration helpers for the Store API.

Settings are read from the environment once at process start and passed into the
app and the repository, so that routers/repositories never fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_connection_string: str
    table_name: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_connection_string=(os.getenv("STORAGE_ACCOUNT_CONNECTION_STRING") or "").strip(),
        table_name=(os.getenv("STORE_TABLE_NAME") or "stores").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
