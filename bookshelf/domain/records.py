"""
Record types stored by collections.

Every record carries an ``id`` field from construction. It stays ``None``
until a collection assigns one in ``Collection.add``.
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, field
from typing import Any, ClassVar, Mapping, Optional, Type, TypeVar

from bookshelf.core.errors import CorruptStateError

R = TypeVar("R", bound="Record")


@dataclass
class Record:
    """Base record: store-assigned string identifier."""

    id: Optional[str] = field(default=None, kw_only=True)

    # attribute name -> JSON key
    _fields: ClassVar[dict[str, str]] = {}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for attr, key in self._fields.items():
            value = getattr(self, attr)
            data[key] = list(value) if isinstance(value, list) else value
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls: Type[R], data: Mapping[str, Any], *, source: str = "") -> R:
        if not isinstance(data, Mapping):
            raise CorruptStateError(source or cls.__name__, f"expected an object, got {type(data).__name__}")
        kwargs: dict[str, Any] = {}
        for attr, key in cls._fields.items():
            if key in data:
                kwargs[attr] = data[key]
            elif not cls._has_default(attr):
                raise CorruptStateError(source or cls.__name__, f"{cls.__name__} is missing {key!r}")
        record_id = data.get("id")
        if record_id is not None:
            record_id = str(record_id)
        record = cls(**kwargs, id=record_id)
        record._check_types(source or cls.__name__)
        return record

    @classmethod
    def _has_default(cls, attr: str) -> bool:
        dc_field = cls.__dataclass_fields__[attr]
        return dc_field.default is not MISSING or dc_field.default_factory is not MISSING

    def _check_types(self, source: str) -> None:
        """Hook for subclasses to reject wrongly typed fields after decoding."""


@dataclass
class Book(Record):
    title: str
    author: str
    year: int
    is_borrowed: bool = False

    _fields: ClassVar[dict[str, str]] = {
        "title": "title",
        "author": "author",
        "year": "year",
        "is_borrowed": "isBorrowed",
    }

    def _check_types(self, source: str) -> None:
        if not isinstance(self.title, str) or not isinstance(self.author, str):
            raise CorruptStateError(source, "book title and author must be strings")
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise CorruptStateError(source, f"book year must be an integer, got {self.year!r}")
        if not isinstance(self.is_borrowed, bool):
            raise CorruptStateError(source, "isBorrowed must be a boolean")


@dataclass
class User(Record):
    name: str
    email: str
    borrowed_books: list[str] = field(default_factory=list)

    _fields: ClassVar[dict[str, str]] = {
        "name": "name",
        "email": "email",
        "borrowed_books": "borrowedBooks",
    }

    def _check_types(self, source: str) -> None:
        if not isinstance(self.name, str) or not isinstance(self.email, str):
            raise CorruptStateError(source, "user name and email must be strings")
        if not isinstance(self.borrowed_books, list):
            raise CorruptStateError(source, "borrowedBooks must be a list")
        self.borrowed_books = [str(book_id) for book_id in self.borrowed_books]
