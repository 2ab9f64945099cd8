"""Library use cases: registration, borrowing and returning books."""

from __future__ import annotations

from typing import Optional
import logging

from bookshelf.core.errors import BookshelfError
from bookshelf.domain.records import Book, User
from bookshelf.domain.validation import parse_year, validate_book, validate_user
from bookshelf.repositories.collection import Collection

logger = logging.getLogger(__name__)

BOOKS_NAMESPACE = "books"
USERS_NAMESPACE = "users"


class LibraryError(BookshelfError):
    """Base exception for library workflows."""


class BookNotFoundError(LibraryError):
    """Raised when a book id does not exist."""


class UserNotFoundError(LibraryError):
    """Raised when a user id does not exist."""


class BookUnavailableError(LibraryError):
    """Raised when the book is currently borrowed."""


class BookNotBorrowedError(LibraryError):
    """Raised when the user does not hold the book being returned."""


class LibraryService:
    """Registers books/users and tracks who borrowed what."""

    def __init__(
        self,
        books: Optional[Collection[Book]] = None,
        users: Optional[Collection[User]] = None,
        in_memory: bool = False,
    ) -> None:
        self.books = books if books is not None else Collection(BOOKS_NAMESPACE, Book, in_memory=in_memory)
        self.users = users if users is not None else Collection(USERS_NAMESPACE, User, in_memory=in_memory)

    def register_book(self, title: str, author: str, year_text: str) -> tuple[Optional[str], dict[str, str]]:
        errors = validate_book(title, author, year_text)
        if errors:
            return None, errors
        book = Book(title=title.strip(), author=author.strip(), year=parse_year(year_text))
        book_id = self.books.add(book)
        logger.info("Registered book %s (%s)", book_id, book.title)
        return book_id, {}

    def register_user(self, name: str, email: str) -> tuple[Optional[str], dict[str, str]]:
        errors = validate_user(name, email)
        if errors:
            return None, errors
        user = User(name=name.strip(), email=email.strip())
        user_id = self.users.add(user)
        logger.info("Registered user %s (%s)", user_id, user.email)
        return user_id, {}

    def _get_book(self, book_id: str) -> Book:
        book = self.books.find_by_id(book_id)
        if not book:
            raise BookNotFoundError(f"Book {book_id} not found")
        return book

    def _get_user(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    def borrow_book(self, user_id: str, book_id: str) -> None:
        user = self._get_user(user_id)
        book = self._get_book(book_id)
        if book.is_borrowed:
            raise BookUnavailableError(f"Book {book_id} is already borrowed")
        book.is_borrowed = True
        user.borrowed_books.append(book_id)
        self.books.update(book)
        self.users.update(user)
        logger.info("User %s borrowed book %s", user_id, book_id)

    def return_book(self, user_id: str, book_id: str) -> None:
        user = self._get_user(user_id)
        book = self._get_book(book_id)
        if book_id not in user.borrowed_books:
            raise BookNotBorrowedError(f"User {user_id} does not hold book {book_id}")
        user.borrowed_books.remove(book_id)
        book.is_borrowed = False
        self.users.update(user)
        self.books.update(book)
        logger.info("User %s returned book %s", user_id, book_id)

    def remove_book(self, book_id: str) -> None:
        book = self.books.find_by_id(book_id)
        if book and book.is_borrowed:
            raise BookUnavailableError(f"Book {book_id} is borrowed and cannot be removed")
        self.books.remove(book_id)

    def remove_user(self, user_id: str) -> None:
        user = self.users.find_by_id(user_id)
        if user:
            for book_id in list(user.borrowed_books):
                book = self.books.find_by_id(book_id)
                if book:
                    book.is_borrowed = False
                    self.books.update(book)
        self.users.remove(user_id)

    def available_books(self) -> list[Book]:
        return self.books.find(lambda book: not book.is_borrowed)

    def borrowed_by(self, user_id: str) -> list[Book]:
        user = self._get_user(user_id)
        return [book for book in (self.books.find_by_id(b) for b in user.borrowed_books) if book]
