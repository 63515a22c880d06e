"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- A fresh in-memory store per test
- Repository fixtures bound to that store
"""

import os
import sys
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_JSON"] = "true"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def storage():
    """
    Provide an in-memory storage handle with the schema in place.

    Each test gets its own handle, so nothing leaks between tests.
    """
    from fakestore.core.database import Storage
    from fakestore.core.schema import init_schema

    handle = Storage(TEST_DATABASE_URL)
    await init_schema(handle)

    yield handle

    await handle.close()


@pytest.fixture
async def bare_storage():
    """Provide an in-memory storage handle without any tables."""
    from fakestore.core.database import Storage

    handle = Storage(TEST_DATABASE_URL)

    yield handle

    await handle.close()


@pytest.fixture
def user_repo(storage):
    from fakestore.repositories import UserRepository

    return UserRepository(storage)


@pytest.fixture
def order_repo(storage):
    from fakestore.repositories import OrderRepository

    return OrderRepository(storage)


@pytest.fixture
def cart_repo(storage):
    from fakestore.repositories import CartRepository

    return CartRepository(storage)
