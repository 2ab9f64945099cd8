#!/usr/bin/env python3
"""
Print the stored books or users.

Usage:
  python scripts/list_records.py books [--available]
  python scripts/list_records.py users
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.services.library_service import LibraryService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="List stored records")
    ap.add_argument("kind", choices=["books", "users"])
    ap.add_argument("--available", action="store_true", help="Only books not currently borrowed")
    args = ap.parse_args()

    svc = LibraryService()
    if args.kind == "books":
        books = svc.available_books() if args.available else svc.books.get_all()
        for book in books:
            flag = "borrowed" if book.is_borrowed else "available"
            print(f"{book.id}\t{book.title}\t{book.author}\t{book.year}\t{flag}")
    else:
        for user in svc.users.get_all():
            held = ",".join(user.borrowed_books) or "-"
            print(f"{user.id}\t{user.name}\t{user.email}\t{held}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
