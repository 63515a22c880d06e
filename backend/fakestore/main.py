"""
fakestore composition root.

Builds the storage handle, prepares the schema and hands out the
repositories that share it. The API layer opens one store at process start
and keeps it until shutdown:

    async with open_store() as store:
        result = await store.users.create_user("Ada", "ada@example.com", "<hash>")
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncGenerator, Optional

from fakestore.core.config import Settings
from fakestore.core.database import Storage
from fakestore.core.logging_config import setup_logging
from fakestore.core.schema import init_schema
from fakestore.repositories import CartRepository, OrderRepository, UserRepository


@dataclass
class Store:
    """Storage handle plus the repositories bound to it."""

    storage: Storage
    users: UserRepository = field(init=False)
    orders: OrderRepository = field(init=False)
    cart: CartRepository = field(init=False)

    def __post_init__(self) -> None:
        self.users = UserRepository(self.storage)
        self.orders = OrderRepository(self.storage)
        self.cart = CartRepository(self.storage)


@asynccontextmanager
async def open_store(
    settings: Optional[Settings] = None,
    configure_logging: bool = True,
) -> AsyncGenerator[Store, None]:
    """
    Store lifespan context manager.

    Startup:
        - Set up logging (unless configure_logging is False)
        - Open the storage handle
        - Create missing tables

    Shutdown:
        - Close the storage handle

    Args:
        settings: Settings to use; defaults to the module-level settings
        configure_logging: Install the root log handler from settings
    """
    if settings is None:
        from fakestore.core.config import settings as default_settings
        settings = default_settings

    if configure_logging:
        setup_logging(level=settings.log_level, json_format=settings.log_json)

    storage = Storage.from_settings(settings)
    try:
        await init_schema(storage)
        yield Store(storage)
    finally:
        await storage.close()
