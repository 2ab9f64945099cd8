"""Exception hierarchy for bookshelf."""


class BookshelfError(Exception):
    """Base exception for the bookshelf package."""


class StorageError(BookshelfError):
    """Raised when the durable medium fails to read or write."""


class CorruptStateError(StorageError):
    """Raised when persisted data cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Malformed data under {key!r}: {reason}")
        self.key = key
        self.reason = reason
