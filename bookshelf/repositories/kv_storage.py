"""
Durable key-value media.

Collections only need ``get(key) -> str | None`` and ``set(key, value)``.
Three adapters are provided: a SQL table (default), a single JSON file and
a process-local dict.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol
import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from bookshelf.core.config import get_settings
from bookshelf.core.errors import CorruptStateError, StorageError
from bookshelf.db.models import KeyValueEntry
from bookshelf.db.session import Base, get_engine, get_session

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class SQLKeyValueStorage:
    """String values stored in the ``kv_store`` table."""

    def __init__(self, ensure_schema: bool = True) -> None:
        if ensure_schema:
            try:
                Base.metadata.create_all(bind=get_engine(), tables=[KeyValueEntry.__table__])
            except SQLAlchemyError as exc:
                raise StorageError(f"Could not prepare kv_store table: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read {key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                entry = session.get(KeyValueEntry, key)
                if not entry:
                    session.add(KeyValueEntry(key=key, value=value, updated_at=now))
                else:
                    entry.value = value
                    entry.updated_at = now
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to write {key!r}: {exc}") from exc


class JsonFileStorage:
    """All keys kept in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise CorruptStateError(str(self.path), f"invalid JSON ({exc})") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptStateError(str(self.path), "top-level value must be an object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}: {exc}") from exc


class MemoryKeyValueStorage:
    """Dict-backed medium; shared by every collection holding the same instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


@lru_cache
def get_storage() -> KeyValueStorage:
    """Build the medium selected by BOOKSHELF_STORAGE."""
    settings = get_settings()
    logger.debug("Using %s key-value storage", settings.storage_backend)
    if settings.storage_backend == "json":
        return JsonFileStorage(settings.data_file)
    if settings.storage_backend == "memory":
        return MemoryKeyValueStorage()
    return SQLKeyValueStorage()
