"""
Tests for the line-item serialization boundary and pricing policy.
"""

import json

import pytest
from pydantic import ValidationError

from fakestore.schemas.items import (
    LineItem,
    decode_items,
    encode_items,
    line_total,
    order_totals,
    parse_line_items,
)


class TestLineItem:
    """Tests for LineItem validation."""

    def test_extra_keys_preserved(self):
        item = LineItem(price=4.5, quantity=2, id=3, title="Mug")

        assert item.model_dump() == {"price": 4.5, "quantity": 2, "id": 3, "title": "Mug"}

    def test_missing_quantity_rejected(self):
        with pytest.raises(ValidationError):
            parse_line_items([{"price": 1.0}])

    def test_non_numeric_price_rejected(self):
        with pytest.raises(ValidationError):
            parse_line_items([{"price": "cheap", "quantity": 1}])

    def test_nan_price_rejected(self):
        with pytest.raises(ValidationError):
            LineItem(price=float("nan"), quantity=1)


class TestPricing:
    """Tests for line_total and order_totals."""

    def test_two_line_order_total(self):
        items = parse_line_items([{"price": 10.0, "quantity": 2}, {"price": 2.5, "quantity": 1}])

        assert order_totals(items) == (3, 2250)

    def test_half_rounds_up(self):
        # 0.125 * 100 is exactly 12.5; banker's rounding would give 12
        assert line_total(LineItem(price=0.125, quantity=1)) == 13

    def test_float_noise_rounds_to_nearest(self):
        # 0.1 * 3 * 100 == 30.000000000000004
        assert line_total(LineItem(price=0.1, quantity=3)) == 30

    def test_per_line_rounding_differs_from_sum_first(self):
        items = [LineItem(price=0.004, quantity=1), LineItem(price=0.004, quantity=1)]

        item_count, total_price = order_totals(items)

        assert item_count == 2
        assert total_price == 0

    def test_empty_items(self):
        assert order_totals([]) == (0, 0)


class TestEncoding:
    """Tests for encode_items and decode_items."""

    def test_plain_dicts_written_as_given(self):
        items = [{"price": 1000, "quantity": 2, "sku": "A-1"}]

        assert json.loads(encode_items(items)) == items

    def test_models_dumped_with_extras(self):
        items = [LineItem(price=1.5, quantity=1, sku="B-2")]

        assert json.loads(encode_items(items)) == [{"price": 1.5, "quantity": 1, "sku": "B-2"}]

    def test_non_ascii_kept(self):
        encoded = encode_items([{"title": "Café"}])

        assert "Café" in encoded
        assert decode_items(encoded) == [{"title": "Café"}]

    def test_decode_rejects_non_array(self):
        with pytest.raises(ValueError):
            decode_items('{"price": 1}')

    def test_decode_rejects_invalid_json(self):
        with pytest.raises(ValueError):
            decode_items("not json")
