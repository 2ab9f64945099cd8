from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the bookshelf package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.domain.validation import (  # noqa: E402
    MESSAGES,
    is_valid_email,
    parse_year,
    validate_book,
    validate_user,
)


def test_empty_title_reports_only_title():
    assert validate_book("", "A", "2020") == {"bookTitle": "Назва книги не може бути пустою"}


def test_blank_author_is_empty():
    assert validate_book("Some Title", "   ", "2022") == {"bookAuthor": "Автор не може бути пустим"}


def test_non_numeric_year():
    assert validate_book("T", "A", "abc") == {"bookYear": "Рік видання повинен бути числом"}


def test_book_checks_every_field():
    result = validate_book("", " ", "")
    assert result == {
        "bookTitle": MESSAGES["bookTitle"],
        "bookAuthor": MESSAGES["bookAuthor"],
        "bookYear": MESSAGES["bookYear"],
    }


def test_valid_book_has_no_errors():
    assert validate_book("Some Title", "Some Author", "2022") == {}


@pytest.mark.parametrize(
    "text, expected",
    [("2020", 2020), (" 1840 ", 1840), ("-300", -300), ("+12", 12), ("1999abc", 1999), ("", None), ("-", None), ("abc", None), (None, None), ("２０２０", None), ("\u0663\u0660", None)],
)
def test_parse_year(text, expected):
    assert parse_year(text) == expected


def test_empty_user_name():
    assert validate_user("", "user@example.com") == {"userName": "Ім'я не може бути пустим"}


def test_empty_and_invalid_email():
    assert validate_user("Some Name", "") == {"userEmail": "Email не є дійсним"}
    assert validate_user("Name", "not-an-email") == {"userEmail": "Email не є дійсним"}


def test_valid_user():
    assert validate_user("Name", "a@b.com") == {}


def test_none_inputs_are_treated_as_empty():
    assert set(validate_user(None, None)) == {"userName", "userEmail"}


@pytest.mark.parametrize("email", ["a@b", "a b@c.com", "@b.com", "a@@b.com", "a@b.c om"])
def test_rejected_emails(email):
    assert not is_valid_email(email)


def test_validators_are_pure():
    first = validate_book("", "A", "x")
    second = validate_book("", "A", "x")
    assert first == second
    first["bookTitle"] = "changed"
    assert validate_book("", "A", "x")["bookTitle"] == MESSAGES["bookTitle"]


def test_full_width_year_is_not_a_number():
    assert validate_book("T", "A", "２０２０") == {"bookYear": MESSAGES["bookYear"]}
