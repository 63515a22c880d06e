"""
Line-item serialization boundary.

Order and cart contents are stored as a UTF-8 JSON array in a single TEXT
column. The store treats that column as opaque; this module owns its
encoding and the numeric policy used to price an order.
"""

import json
import math
from typing import Any, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LineItem(BaseModel):
    """
    One purchased product inside an order or cart.

    Only price and quantity are interpreted; any other keys (product id,
    title, image...) are kept as-is and written back unchanged.

    Attributes:
        price: Unit price in major currency units (e.g. 10.5)
        quantity: Number of units
    """

    model_config = ConfigDict(extra="allow")

    price: float = Field(..., allow_inf_nan=False, description="Unit price in major units")
    quantity: int = Field(..., description="Number of units purchased")


line_items_adapter = TypeAdapter(List[LineItem])


def parse_line_items(items: Iterable[Any]) -> List[LineItem]:
    """
    Validate raw items into LineItem records.

    Raises:
        pydantic.ValidationError: An item lacks a numeric price or quantity
    """
    return line_items_adapter.validate_python(list(items))


def encode_items(items: Iterable[Any]) -> str:
    """
    Encode items for a TEXT column.

    Pydantic models are dumped with their extra keys; plain mappings are
    written exactly as given.
    """
    payload = [
        item.model_dump(mode="json") if isinstance(item, BaseModel) else item
        for item in items
    ]
    return json.dumps(payload, ensure_ascii=False)


def decode_items(text: str) -> List[Any]:
    """
    Decode a stored items column.

    Raises:
        ValueError: The column is not valid JSON or not a JSON array
    """
    items = json.loads(text)
    if not isinstance(items, list):
        raise ValueError(f"Expected a JSON array of items, got {type(items).__name__}")
    return items


def line_total(item: LineItem) -> int:
    """
    Price of one line in minor units, rounded half up.

    quantity * price * 100, rounded to the nearest integer with .5 going up.
    """
    return math.floor(item.quantity * item.price * 100 + 0.5)


def order_totals(items: Iterable[LineItem]) -> Tuple[int, int]:
    """
    Derive (item_count, total_price) for an order.

    Each line is rounded before summing; rounding the summed total once
    gives different results and must not be substituted.
    """
    item_count = 0
    total_price = 0
    for item in items:
        item_count += item.quantity
        total_price += line_total(item)
    return item_count, total_price
