"""
High-level use cases for bookshelf.

Services orchestrate validation and collections (register a book, lend it
to a user, take it back). Callers such as scripts should go through these
instead of mutating collections directly.
"""
