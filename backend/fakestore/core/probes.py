"""
Health probe for the embedded store.

The probe:
- Returns bool (True = healthy, False = unhealthy)
- Handles exceptions gracefully
- Includes a timeout
"""

import asyncio

from fakestore.core.database import Storage


async def check_database(storage: Storage, timeout_seconds: float = 2.0) -> bool:
    """
    Check database connectivity.

    Executes a simple SELECT 1 query to verify the store is open and
    responding. Includes timeout to prevent hanging behind a stuck statement.

    Args:
        storage: Storage handle to probe
        timeout_seconds: Maximum time to wait for response (default: 2.0)

    Returns:
        True if the store is reachable and healthy, False otherwise

    Example:
        >>> if not await check_database(storage):
        ...     raise RuntimeError("Database unavailable")
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            row = await storage.fetch_one("SELECT 1 AS ok")
            return row is not None and row["ok"] == 1

    except asyncio.TimeoutError:
        return False
    except Exception:
        # Any other error (closed handle, driver failure, etc.)
        return False
