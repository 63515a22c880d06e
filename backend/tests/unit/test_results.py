"""
Tests for tagged results and the uniform envelope.
"""

from fakestore.schemas.records import Order, User
from fakestore.schemas.results import (
    CartContents,
    EmailAvailable,
    ErrorKind,
    Failure,
    OrderList,
    UserCreated,
    is_ok,
)


class TestEnvelope:
    """Tests for to_envelope()."""

    def test_success_flattens_payload(self):
        result = UserCreated(id=3, name="Ada", email="ada@example.com")

        assert result.to_envelope() == {"status": "OK", "id": 3, "name": "Ada", "email": "ada@example.com"}

    def test_failure_has_status_and_message_only(self):
        result = Failure.conflict("The email is already used.")

        assert result.to_envelope() == {"status": "error", "message": "The email is already used."}

    def test_nested_records(self):
        order = Order(id=1, user_id=2, item_count=3, total_price=2250, order_items=[{"price": 1}])

        envelope = OrderList(orders=[order]).to_envelope()

        assert envelope["orders"][0]["is_paid"] is False
        assert envelope["orders"][0]["order_items"] == [{"price": 1}]


class TestVariants:
    """Tests for variant tagging."""

    def test_failure_constructors(self):
        assert Failure.validation("x").kind is ErrorKind.VALIDATION
        assert Failure.conflict("x").kind is ErrorKind.CONFLICT
        assert Failure.unauthorized("x").kind is ErrorKind.UNAUTHORIZED
        assert Failure.storage("x").kind is ErrorKind.STORAGE

    def test_is_ok(self):
        assert is_ok(EmailAvailable())
        assert is_ok(CartContents(items=[]))
        assert not is_ok(Failure.storage("boom"))


class TestRecords:
    """Tests for row mapping."""

    def test_order_from_row(self):
        row = {
            "id": 4,
            "uid": 9,
            "item_numbers": 2,
            "is_paid": 1,
            "is_delivered": 0,
            "total_price": 1999,
            "order_items": '[{"price": 9.995, "quantity": 2}]',
        }

        order = Order.from_row(row)

        assert order.user_id == 9
        assert order.item_count == 2
        assert order.is_paid is True
        assert order.is_delivered is False
        assert order.order_items == [{"price": 9.995, "quantity": 2}]

    def test_user_repr_hides_password(self):
        user = User.from_row({"id": 1, "name": "Ada", "email": "ada@example.com", "password": "s3cret"})

        assert "s3cret" not in repr(user)
        assert "password" not in user.model_dump()
