"""
fakestore: async data-access layer for a small e-commerce backend.

Owns the embedded SQLite store and exposes user, order and cart
repositories that always answer with a tagged result.
"""

__version__ = "0.1.0"
