"""
Order repository.

Orders are created in one step from a user id and a list of line items.
Item count and total price are derived at creation and never recomputed;
afterwards only the payment and delivery flags change.
"""

from typing import Any, Iterable

from fakestore.core.database import Params, Storage, StorageError
from fakestore.core.logging_config import get_logger, log_with_context
from fakestore.schemas.items import encode_items, order_totals, parse_line_items
from fakestore.schemas.records import Order
from fakestore.schemas.results import (
    CreateOrderResult,
    Failure,
    OrderCreated,
    OrderList,
    OrderListResult,
    OrderUpdated,
    UpdateOrderResult,
)

logger = get_logger(__name__)


class OrderRepository:
    """
    Repository for order data access.

    Attributes:
        storage: Shared storage handle
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def create_order(self, user_id: int, items: Iterable[Any]) -> CreateOrderResult:
        """
        Create an unpaid, undelivered order.

        Args:
            user_id: Owning user (not checked against the users table)
            items: Line items, each with a numeric price (major units) and
                an integer quantity; other keys are stored untouched

        Returns:
            OrderCreated with the generated id, or a Failure

        Example:
            >>> result = await repo.create_order(
            ...     user_id=1,
            ...     items=[{"price": 10.0, "quantity": 2}, {"price": 2.5, "quantity": 1}],
            ... )
            >>> result.id
            1

        Note:
            total_price is stored in minor units: each line is
            round(quantity * price * 100) and the lines are summed.
        """
        try:
            items = list(items)
            line_items = parse_line_items(items)
            payload = encode_items(items)
        except (TypeError, ValueError):
            # pydantic.ValidationError is a ValueError
            return Failure.validation("Order items must carry a numeric price and quantity.")

        item_count, total_price = order_totals(line_items)

        try:
            res = await self.storage.execute(
                "INSERT INTO orders (uid, item_numbers, total_price, order_items, is_paid, is_delivered) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                [user_id, item_count, total_price, payload, 0, 0],
            )
        except StorageError:
            logger.error(
                "Storage failure",
                extra={"operation": "create_order", "user_id": user_id},
                exc_info=True,
            )
            return Failure.storage("Failed to insert orders!")

        log_with_context(
            logger,
            "info",
            "Order created",
            operation="create_order",
            user_id=user_id,
            order_id=res.generated_id,
        )
        return OrderCreated(id=res.generated_id)

    async def get_all_orders(self) -> OrderListResult:
        """Return every order, in store order."""
        return await self._list_orders(
            "get_all_orders",
            "SELECT * FROM orders",
            None,
            "Failed to get all orders!",
        )

    async def get_orders_by_user(self, user_id: int) -> OrderListResult:
        """Return the orders owned by one user; an unknown user yields []."""
        return await self._list_orders(
            "get_orders_by_user",
            "SELECT * FROM orders WHERE uid = :uid",
            {"uid": user_id},
            "Failed to get orders by user!",
        )

    async def update_order(self, order_id: int, is_paid: bool, is_delivered: bool) -> UpdateOrderResult:
        """
        Set the payment and delivery flags of an order.

        Both flags are written as given. Nothing stops an order from being
        marked delivered before paid, and an unknown order_id updates zero
        rows and still reports success.

        Returns:
            OrderUpdated with the affected row count, or a STORAGE Failure
            (e.g. a flag outside {0, 1}, or one that is not an integer at all)
        """
        try:
            res = await self.storage.execute(
                "UPDATE orders SET is_paid = :is_paid, is_delivered = :is_delivered WHERE id = :order_id",
                {"is_paid": int(is_paid), "is_delivered": int(is_delivered), "order_id": order_id},
            )
        except (StorageError, TypeError, ValueError):
            # TypeError/ValueError: a flag that is not an integer
            logger.error(
                "Storage failure",
                extra={"operation": "update_order", "order_id": order_id},
                exc_info=True,
            )
            return Failure.storage("update order error")

        log_with_context(
            logger,
            "info",
            "Order updated",
            operation="update_order",
            order_id=order_id,
            affected_rows=res.affected_rows,
            is_paid=bool(is_paid),
            is_delivered=bool(is_delivered),
        )
        return OrderUpdated(affected_rows=res.affected_rows)

    async def _list_orders(
        self,
        operation: str,
        statement: str,
        params: Params,
        message: str,
    ) -> OrderListResult:
        try:
            rows = await self.storage.fetch_all(statement, params)
            orders = [Order.from_row(row) for row in rows]
        except (StorageError, ValueError):
            # ValueError: an order_items column that is not a JSON array
            logger.error("Storage failure", extra={"operation": operation}, exc_info=True)
            return Failure.storage(message)

        return OrderList(orders=orders)
