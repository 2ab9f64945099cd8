"""
Core utilities shared across the bookshelf package.

This package hosts:
- configuration helpers (env vars, storage selection, counter key)
- the exception hierarchy used by repositories and services
"""
