"""
Repository layer for data access.

One repository per domain (users, orders, cart). Each method maps a domain
action to a fixed set of SQL statements and returns a tagged result.
"""

from fakestore.repositories.cart import CartRepository
from fakestore.repositories.orders import OrderRepository
from fakestore.repositories.users import UserRepository

__all__ = ["CartRepository", "OrderRepository", "UserRepository"]
