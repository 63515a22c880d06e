"""
Records decoded from stored rows.

Row column names stay inside from_row(); the records expose the names the
rest of the package uses.
"""

from typing import Any, List

from pydantic import BaseModel, Field

from fakestore.schemas.items import decode_items


class User(BaseModel):
    """
    A stored user account.

    Attributes:
        id: Generated user id
        name: Display name
        email: Unique login email
        password: Opaque password string, kept out of dumps and repr
    """

    id: int
    name: str
    email: str
    password: str = Field(repr=False, exclude=True)

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )


class Order(BaseModel):
    """
    A stored order.

    Attributes:
        id: Generated order id
        user_id: Owning user (``orders.uid``)
        item_count: Sum of purchased quantities (``orders.item_numbers``)
        is_paid: Payment flag
        is_delivered: Delivery flag
        total_price: Total in minor currency units
        order_items: Decoded line items, extra keys intact
    """

    id: int
    user_id: int
    item_count: int
    is_paid: bool = False
    is_delivered: bool = False
    total_price: int
    order_items: List[Any] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict) -> "Order":
        return cls(
            id=row["id"],
            user_id=row["uid"],
            item_count=row["item_numbers"],
            is_paid=bool(row["is_paid"]),
            is_delivered=bool(row["is_delivered"]),
            total_price=row["total_price"],
            order_items=decode_items(row["order_items"]),
        )
