"""Generic persisted collection of records of one kind."""
from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, Type, TypeVar
import logging

from bookshelf.domain.records import Record
from bookshelf.repositories.backends import CollectionBackend, DurableBackend, EphemeralBackend

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)


class Collection(Generic[T]):
    """
    Ordered records of ``record_type`` stored under ``namespace``.

    Durable collections (default) load their rows and the id counter from the
    configured key-value medium and write back after every mutation.
    ``in_memory=True`` collections start empty and never touch the medium.
    """

    def __init__(
        self,
        namespace: str,
        record_type: Type[T],
        in_memory: bool = False,
        backend: Optional[CollectionBackend] = None,
    ) -> None:
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        if backend is None:
            backend = EphemeralBackend() if in_memory else DurableBackend(namespace)
        elif in_memory and backend.durable:
            raise ValueError("in_memory flag contradicts the supplied backend")
        self.namespace = namespace
        self.record_type = record_type
        self._backend = backend
        self._items: list[T] = []
        self._next_id = 1
        self._load()

    @property
    def in_memory(self) -> bool:
        return not self._backend.durable

    @property
    def backend(self) -> CollectionBackend:
        return self._backend

    def _load(self) -> None:
        rows, next_id = self._backend.load()
        self._items = [self.record_type.from_dict(row, source=self.namespace) for row in rows]
        highest = max((_numeric(item.id) for item in self._items), default=0)
        if highest >= next_id:
            logger.warning(
                "Counter %d for %r is behind stored id %d; continuing from %d",
                next_id,
                self.namespace,
                highest,
                highest + 1,
            )
            next_id = highest + 1
        self._next_id = next_id

    def _persist(self) -> None:
        # never write back a counter lower than the shared one
        self._next_id = max(self._next_id, self._backend.load_counter())
        self._backend.save([item.to_dict() for item in self._items], self._next_id)

    def _allocate_id(self) -> str:
        # the persisted counter may be ahead when other collections share it
        current = max(self._next_id, self._backend.load_counter())
        self._next_id = current + 1
        return str(current)

    def add(self, record: T) -> str:
        record_id = self._allocate_id()
        record.id = record_id
        self._items.append(record)
        self._persist()
        logger.debug("Added %s %s to %r", type(record).__name__, record_id, self.namespace)
        return record_id

    def remove(self, record_id: str) -> None:
        self._items = [item for item in self._items if item.id != record_id]
        self._persist()

    def get_all(self) -> list[T]:
        """Records in insertion order (a new list; the records are shared)."""
        return list(self._items)

    def find_by_id(self, record_id: str) -> Optional[T]:
        for item in self._items:
            if item.id == record_id:
                return item
        return None

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items if predicate(item)]

    def update(self, record: T) -> None:
        if record.id is None:
            return
        for index, item in enumerate(self._items):
            if item.id == record.id:
                self._items[index] = record
                self._persist()
                return

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __contains__(self, record_id: object) -> bool:
        return any(item.id == record_id for item in self._items)

    def __repr__(self) -> str:
        mode = "memory" if self.in_memory else "durable"
        return f"Collection({self.namespace!r}, {self.record_type.__name__}, {mode}, {len(self._items)} records)"


def _numeric(record_id: Optional[str]) -> int:
    try:
        return int(record_id or 0)
    except ValueError:
        return 0
