"""
Persistence backends for collections.

A backend loads and saves one collection's rows plus the id counter.
``DurableBackend`` writes through to a key-value medium; ``EphemeralBackend``
always starts fresh and only keeps a local snapshot.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional
import json
import logging

from bookshelf.core.config import get_settings
from bookshelf.core.errors import CorruptStateError
from bookshelf.repositories.kv_storage import KeyValueStorage, get_storage

logger = logging.getLogger(__name__)

Rows = list[dict[str, Any]]


class CollectionBackend(ABC):
    """Load/save capability used by ``Collection``."""

    durable: bool = False

    @abstractmethod
    def load(self) -> tuple[Rows, int]:
        """Return the persisted rows and the next id (1 when nothing is stored)."""

    @abstractmethod
    def save(self, rows: Rows, next_id: int) -> None:
        """Persist ``rows`` and ``next_id``."""

    def load_counter(self) -> int:
        """Current persisted next id; 1 when there is none."""
        return 1


class DurableBackend(CollectionBackend):
    durable = True

    def __init__(
        self,
        namespace: str,
        storage: Optional[KeyValueStorage] = None,
        counter_key: Optional[str] = None,
    ) -> None:
        self.namespace = namespace
        self.storage = storage if storage is not None else get_storage()
        self.counter_key = counter_key or get_settings().id_counter_key

    def load(self) -> tuple[Rows, int]:
        raw = self.storage.get(self.namespace)
        rows: Rows = []
        if raw:
            try:
                rows = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise CorruptStateError(self.namespace, f"invalid JSON ({exc})") from exc
            if not isinstance(rows, list):
                raise CorruptStateError(self.namespace, "expected a JSON array of records")
        next_id = self.load_counter()
        logger.debug("Loaded %d rows from %r (next id %d)", len(rows), self.namespace, next_id)
        return rows, next_id

    def load_counter(self) -> int:
        raw = self.storage.get(self.counter_key)
        if not raw:
            return 1
        try:
            value = int(str(raw).strip(), 10)
        except ValueError as exc:
            raise CorruptStateError(self.counter_key, f"counter is not a decimal integer: {raw!r}") from exc
        if value < 1:
            raise CorruptStateError(self.counter_key, f"counter must be positive, got {value}")
        return value

    def save(self, rows: Rows, next_id: int) -> None:
        next_id = max(next_id, self.load_counter())
        self.storage.set(self.namespace, json.dumps(rows, ensure_ascii=False))
        self.storage.set(self.counter_key, str(next_id))
        logger.debug("Saved %d rows to %r (next id %d)", len(rows), self.namespace, next_id)


class EphemeralBackend(CollectionBackend):
    def __init__(self) -> None:
        self._slot: dict[str, Any] = {}

    def load(self) -> tuple[Rows, int]:
        return [], 1

    def load_counter(self) -> int:
        return int(self._slot.get("next_id", 1))

    def save(self, rows: Rows, next_id: int) -> None:
        self._slot["rows"] = [dict(row) for row in rows]
        self._slot["next_id"] = next_id

    def snapshot(self) -> tuple[Rows, int]:
        return list(self._slot.get("rows", [])), self.load_counter()
