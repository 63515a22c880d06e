"""
Integration tests for the composition root.

Opens a real file-backed store through open_store() and walks a user from
sign-up to a paid order.
"""

import pytest

from fakestore.core.config import Settings
from fakestore.core.probes import check_database
from fakestore.main import Store, open_store
from fakestore.schemas.results import CartContents, OrderList, UserCreated, UserIdentity


@pytest.fixture
def file_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'fake-store.sqlite3'}")
    return Settings(_env_file=None)


async def test_open_store_wires_repositories(file_settings):
    async with open_store(file_settings, configure_logging=False) as store:
        assert isinstance(store, Store)
        assert store.users.storage is store.storage
        assert store.orders.storage is store.storage
        assert store.cart.storage is store.storage
        assert await check_database(store.storage) is True

    assert store.storage.closed


async def test_checkout_flow(file_settings):
    async with open_store(file_settings, configure_logging=False) as store:
        # Sign up and log in
        created = await store.users.create_user("Ada", "ada@example.com", "hash")
        assert isinstance(created, UserCreated)
        login = await store.users.check_user("ada@example.com", "hash")
        assert isinstance(login, UserIdentity)

        # Fill the cart, then turn it into an order
        items = [{"id": 1, "price": 10.0, "quantity": 2}, {"id": 2, "price": 2.5, "quantity": 1}]
        await store.cart.update_cart(login.id, items)
        cart = await store.cart.get_cart(login.id)
        order = await store.orders.create_order(login.id, cart.items)
        await store.cart.update_cart(login.id, [])

        # Pay
        await store.orders.update_order(order.id, is_paid=True, is_delivered=False)

    # Everything survives a restart
    async with open_store(file_settings, configure_logging=False) as store:
        orders = await store.orders.get_orders_by_user(login.id)
        cart = await store.cart.get_cart(login.id)

    assert isinstance(orders, OrderList)
    assert len(orders.orders) == 1
    assert orders.orders[0].total_price == 2250
    assert orders.orders[0].is_paid is True
    assert orders.orders[0].order_items == items
    assert isinstance(cart, CartContents)
    assert cart.items == []
