#!/usr/bin/env python3
"""
Register a new library user.

Usage:
  python scripts/add_user.py --name "Olena" --email olena@example.com
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookshelf.services.library_service import LibraryService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a user")
    ap.add_argument("--name", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    user_id, errors = LibraryService().register_user(args.name, args.email)
    if errors:
        for field, message in errors.items():
            sys.stderr.write(f"{field}: {message}\n")
        raise SystemExit(2)
    print(f"OK: user registered with id {user_id}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
