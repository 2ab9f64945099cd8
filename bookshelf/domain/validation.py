"""Field validation for raw book/user input.

Each validator returns a mapping of field name -> message. An empty mapping
means the input is valid. Validators never raise on bad input.
"""
from __future__ import annotations

import re
from typing import Optional

BOOK_TITLE = "bookTitle"
BOOK_AUTHOR = "bookAuthor"
BOOK_YEAR = "bookYear"
USER_NAME = "userName"
USER_EMAIL = "userEmail"

MESSAGES = {
    BOOK_TITLE: "Назва книги не може бути пустою",
    BOOK_AUTHOR: "Автор не може бути пустим",
    BOOK_YEAR: "Рік видання повинен бути числом",
    USER_NAME: "Ім'я не може бути пустим",
    USER_EMAIL: "Email не є дійсним",
}

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# leading integer, trailing text ignored ("2020", " 2020 ", "2020a")
YEAR_PATTERN = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def parse_year(value: str | None) -> Optional[int]:
    """Parse the leading base-10 integer of ``value``; None when there is none."""
    match = YEAR_PATTERN.match(value or "")
    if not match:
        return None
    return int(match.group(1))


def is_valid_email(value: str | None) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(value or ""))


def validate_book(title: str | None, author: str | None, year_text: str | None) -> dict[str, str]:
    """Check every book field; all checks run regardless of earlier failures."""
    errors: dict[str, str] = {}
    if _blank(title):
        errors[BOOK_TITLE] = MESSAGES[BOOK_TITLE]
    if _blank(author):
        errors[BOOK_AUTHOR] = MESSAGES[BOOK_AUTHOR]
    if parse_year(year_text) is None:
        errors[BOOK_YEAR] = MESSAGES[BOOK_YEAR]
    return errors


def validate_user(name: str | None, email: str | None) -> dict[str, str]:
    errors: dict[str, str] = {}
    if _blank(name):
        errors[USER_NAME] = MESSAGES[USER_NAME]
    if not is_valid_email(email):
        errors[USER_EMAIL] = MESSAGES[USER_EMAIL]
    return errors
