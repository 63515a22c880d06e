"""
Cart repository.

One cart row per user. Every update replaces the stored items wholesale;
there is no merging with what was there before.
"""

from typing import Any, Iterable

from fakestore.core.database import Storage, StorageError
from fakestore.core.logging_config import get_logger
from fakestore.schemas.items import decode_items, encode_items
from fakestore.schemas.results import CartContents, CartUpdated, Failure, GetCartResult, UpdateCartResult

logger = get_logger(__name__)


class CartRepository:
    """
    Repository for shopping cart data access.

    Attributes:
        storage: Shared storage handle
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def update_cart(self, user_id: int, items: Iterable[Any]) -> UpdateCartResult:
        """
        Store the full item list of a user's cart.

        Upsert on the unique ``cart.uid``: the first call inserts the row,
        later calls overwrite ``cart_items``. Single statement, so no
        transaction is needed.
        """
        try:
            res = await self.storage.execute(
                "INSERT INTO cart (uid, cart_items) VALUES (:uid, :items) "
                "ON CONFLICT (uid) DO UPDATE SET cart_items = excluded.cart_items",
                {"uid": user_id, "items": encode_items(items)},
            )
        except (StorageError, TypeError, ValueError):
            # TypeError/ValueError: items that cannot be encoded as JSON
            logger.error(
                "Storage failure",
                extra={"operation": "update_cart", "user_id": user_id},
                exc_info=True,
            )
            return Failure.storage("update cart error")

        return CartUpdated(affected_rows=res.affected_rows)

    async def get_cart(self, user_id: int) -> GetCartResult:
        """
        Return the items in a user's cart.

        A user who never updated their cart has an empty cart, not an error.
        """
        try:
            row = await self.storage.fetch_one(
                "SELECT cart_items FROM cart WHERE uid = :uid",
                {"uid": user_id},
            )
            items = decode_items(row["cart_items"]) if row is not None else []
        except (StorageError, ValueError):
            logger.error(
                "Storage failure",
                extra={"operation": "get_cart", "user_id": user_id},
                exc_info=True,
            )
            return Failure.storage("Failed to get cart items!")

        return CartContents(items=items)
