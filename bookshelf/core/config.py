"""
Configuration helpers for bookshelf.

Exposes a Settings object read from environment variables (storage backend,
database URL, JSON data file, id counter key) so that repositories do not
fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = {"sql", "json", "memory"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    database_url: str
    data_file: str
    id_counter_key: str
    sql_echo: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    backend = (os.getenv("BOOKSHELF_STORAGE") or "sql").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"BOOKSHELF_STORAGE must be one of {sorted(STORAGE_BACKENDS)}, got {backend!r}")

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", "sqlite:///bookshelf.db"),
        data_file=os.getenv("BOOKSHELF_DATA_FILE", "bookshelf.json"),
        id_counter_key=(os.getenv("BOOKSHELF_ID_KEY") or "nextId").strip() or "nextId",
        sql_echo=_bool(os.getenv("BOOKSHELF_SQL_ECHO"), False),
    )
