"""Persisted record collections (books, users) with field validation."""
