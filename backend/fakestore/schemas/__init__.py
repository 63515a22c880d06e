"""
Pydantic types shared by the repositories.

Import result and record types from this module.
"""

from fakestore.schemas.items import LineItem, decode_items, encode_items, order_totals
from fakestore.schemas.records import Order, User
from fakestore.schemas.results import ErrorKind, Failure, Ok, Result, is_ok

__all__ = [
    # Serialization boundary
    "LineItem",
    "decode_items",
    "encode_items",
    "order_totals",
    # Records
    "Order",
    "User",
    # Results
    "ErrorKind",
    "Failure",
    "Ok",
    "Result",
    "is_ok",
]
