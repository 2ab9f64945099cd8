from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.core import config as core_config  # noqa: E402
from bookshelf.domain.records import Book, User  # noqa: E402
from bookshelf.repositories import kv_storage  # noqa: E402
from bookshelf.repositories.collection import Collection  # noqa: E402
from bookshelf.services.library_service import (  # noqa: E402
    BookNotBorrowedError,
    BookNotFoundError,
    BookUnavailableError,
    LibraryService,
    UserNotFoundError,
)


@pytest.fixture()
def svc():
    return LibraryService(in_memory=True)


def test_register_book_trims_and_parses_year(svc):
    book_id, errors = svc.register_book("  Kobzar ", " Taras Shevchenko", " 1840 ")
    assert errors == {}
    book = svc.books.find_by_id(book_id)
    assert (book.title, book.author, book.year) == ("Kobzar", "Taras Shevchenko", 1840)


def test_register_book_with_errors_stores_nothing(svc):
    book_id, errors = svc.register_book("", "A", "abc")
    assert book_id is None
    assert set(errors) == {"bookTitle", "bookYear"}
    assert svc.books.get_all() == []


def test_register_user(svc):
    user_id, errors = svc.register_user("Olena", "olena@example.com")
    assert errors == {}
    assert svc.users.find_by_id(user_id).email == "olena@example.com"

    user_id, errors = svc.register_user("Olena", "nope")
    assert user_id is None
    assert errors == {"userEmail": "Email не є дійсним"}


def test_borrow_and_return(svc):
    book_id, _ = svc.register_book("T", "A", "2000")
    user_id, _ = svc.register_user("N", "n@example.com")

    svc.borrow_book(user_id, book_id)
    assert svc.books.find_by_id(book_id).is_borrowed is True
    assert svc.users.find_by_id(user_id).borrowed_books == [book_id]
    assert svc.available_books() == []
    assert [b.id for b in svc.borrowed_by(user_id)] == [book_id]

    with pytest.raises(BookUnavailableError):
        svc.borrow_book(user_id, book_id)

    svc.return_book(user_id, book_id)
    assert svc.books.find_by_id(book_id).is_borrowed is False
    assert svc.users.find_by_id(user_id).borrowed_books == []

    with pytest.raises(BookNotBorrowedError):
        svc.return_book(user_id, book_id)


def test_unknown_ids_raise(svc):
    book_id, _ = svc.register_book("T", "A", "2000")
    user_id, _ = svc.register_user("N", "n@example.com")
    with pytest.raises(UserNotFoundError):
        svc.borrow_book("999", book_id)
    with pytest.raises(BookNotFoundError):
        svc.borrow_book(user_id, "999")


def test_remove_book_refused_while_borrowed(svc):
    book_id, _ = svc.register_book("T", "A", "2000")
    user_id, _ = svc.register_user("N", "n@example.com")
    svc.borrow_book(user_id, book_id)
    with pytest.raises(BookUnavailableError):
        svc.remove_book(book_id)

    svc.remove_user(user_id)
    assert svc.users.find_by_id(user_id) is None
    assert svc.books.find_by_id(book_id).is_borrowed is False
    svc.remove_book(book_id)
    assert svc.books.get_all() == []


def test_durable_service_uses_configured_storage(monkeypatch):
    monkeypatch.setenv("BOOKSHELF_STORAGE", "memory")
    core_config.get_settings.cache_clear()
    kv_storage.get_storage.cache_clear()
    try:
        svc = LibraryService()
        book_id, _ = svc.register_book("T", "A", "2000")
        user_id, _ = svc.register_user("N", "n@example.com")
        svc.borrow_book(user_id, book_id)

        again = LibraryService()
        assert again.books.find_by_id(book_id).is_borrowed is True
        assert again.users.find_by_id(user_id).borrowed_books == [book_id]
        assert isinstance(again.books, Collection)
        assert isinstance(again.books.get_all()[0], Book)
        assert isinstance(again.users.get_all()[0], User)
    finally:
        core_config.get_settings.cache_clear()
        kv_storage.get_storage.cache_clear()
