#!/usr/bin/env python3
"""
Register a new book in the configured storage.

Usage:
  python scripts/add_book.py --title "Kobzar" --author "Taras Shevchenko" --year 1840
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Make the bookshelf package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.services.library_service import LibraryService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a book")
    ap.add_argument("--title", required=True)
    ap.add_argument("--author", required=True)
    ap.add_argument("--year", required=True, help="Publication year")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    book_id, errors = LibraryService().register_book(args.title, args.author, args.year)
    if errors:
        for field, message in errors.items():
            sys.stderr.write(f"{field}: {message}\n")
        raise SystemExit(2)
    print(f"OK: book registered with id {book_id}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
