"""
Schema initializer.

Creates the users, orders and cart tables if they are missing. Runs once at
startup, before any repository call; safe to re-run against an existing
database file.
"""

from fakestore.core.database import Storage, StorageError
from fakestore.core.logging_config import get_logger

logger = get_logger(__name__)


USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    name     TEXT    NOT NULL,
    email    TEXT    NOT NULL UNIQUE,
    password TEXT    NOT NULL
)
"""

ORDERS_DDL = """
CREATE TABLE IF NOT EXISTS orders (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    uid          INTEGER NOT NULL,
    item_numbers INTEGER NOT NULL,
    is_paid      INTEGER NOT NULL CHECK (is_paid IN (0,1)),
    is_delivered INTEGER NOT NULL CHECK (is_delivered IN (0,1)),
    total_price  INTEGER NOT NULL,
    order_items  TEXT    NOT NULL
)
"""

CART_DDL = """
CREATE TABLE IF NOT EXISTS cart (
    uid        INTEGER UNIQUE NOT NULL,
    cart_items TEXT    NOT NULL
)
"""

# Creation order: users first, then the tables that reference a user id.
TABLES = (
    ("users", USERS_DDL),
    ("orders", ORDERS_DDL),
    ("cart", CART_DDL),
)


async def _create_table(storage: Storage, table: str, ddl: str) -> bool:
    try:
        await storage.execute(ddl)
        return True
    except StorageError as e:
        logger.error(
            f"Failed to create table {table}: {e}",
            extra={"operation": "init_schema", "table": table},
        )
        return False


async def create_users_table(storage: Storage) -> bool:
    return await _create_table(storage, "users", USERS_DDL)


async def create_orders_table(storage: Storage) -> bool:
    return await _create_table(storage, "orders", ORDERS_DDL)


async def create_cart_table(storage: Storage) -> bool:
    return await _create_table(storage, "cart", CART_DDL)


async def init_schema(storage: Storage) -> dict[str, bool]:
    """
    Create all tables, in dependency order.

    A table that cannot be created is logged and reported as False; this
    function never raises. Repository calls against a missing table fail
    later with StorageError.

    Returns:
        Mapping of table name to whether its CREATE statement succeeded
    """
    created = {}
    for table, ddl in TABLES:
        created[table] = await _create_table(storage, table, ddl)

    if all(created.values()):
        logger.info("Schema ready", extra={"operation": "init_schema"})
    return created
