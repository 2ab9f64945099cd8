"""
Persistence adapters.

These modules encapsulate how collections are stored/retrieved (SQL table,
JSON file or process memory). Collections depend on the backend interface
rather than touching a concrete medium.
"""
