"""
Storage handle and statement executor.

Owns the single connection to the embedded SQLite file and exposes three
awaitable primitives over it:

- execute: run one mutating statement, report generated id and row count
- fetch_all: run a read statement, return every row
- fetch_one: run a read statement, return the first row or None

Statements are plain SQL strings. Parameters are either a positional
sequence bound to ``?`` placeholders or a mapping bound to ``:name``
placeholders.
"""

import asyncio
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from fakestore.core.config import Settings
from fakestore.core.logging_config import get_logger

logger = get_logger(__name__)

Params = Union[Sequence[Any], Mapping[str, Any], None]
Row = dict[str, Any]


class StorageError(Exception):
    """
    The embedded engine rejected or failed a statement.

    The message is the underlying driver's message, e.g.
    ``UNIQUE constraint failed: users.email``.
    """


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a mutating statement."""

    generated_id: Optional[int]
    affected_rows: int


def _is_memory_url(database_url: str) -> bool:
    database = make_url(database_url).database
    return not database or database == ":memory:"


def _bind(params: Params) -> Union[tuple, dict]:
    """Normalize params into the shapes the DBAPI cursor accepts."""
    if params is None:
        return ()
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, (str, bytes)):
        raise TypeError("params must be a sequence or a mapping, not a string")
    return tuple(params)


class Storage:
    """
    Process-wide handle to the embedded store.

    Constructed explicitly by the composition root and passed to each
    repository. Wraps an AsyncEngine with a StaticPool so every statement
    goes through the same single connection; an asyncio.Lock makes sure
    only one statement is in flight at a time.

    Attributes:
        database_url: SQLAlchemy URL of the store
        engine: Underlying AsyncEngine (None once closed)
    """

    def __init__(self, database_url: str, echo: bool = False):
        """
        Open the handle.

        Args:
            database_url: ``sqlite+aiosqlite`` URL (file path or :memory:)
            echo: Log every statement through the sqlalchemy.engine logger
        """
        self.database_url = database_url
        self._lock = asyncio.Lock()
        self.engine: Optional[AsyncEngine] = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        use_wal = not _is_memory_url(database_url)

        @event.listens_for(self.engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if use_wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        logger.info("Connected to database through %s", database_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        """Build a handle from application settings."""
        return cls(settings.database_url, echo=settings.sql_echo)

    async def __aenter__(self) -> "Storage":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self.engine is None

    async def close(self) -> None:
        """
        Dispose the engine and its connection.

        Safe to call more than once. Any later statement raises StorageError.
        """
        if self.engine is None:
            return
        engine, self.engine = self.engine, None
        async with self._lock:
            await engine.dispose()
        logger.info("Closed database %s", self.database_url)

    async def execute(self, statement: str, params: Params = None) -> ExecResult:
        """
        Run one INSERT/UPDATE/DELETE (or DDL) statement.

        Args:
            statement: SQL text with ``?`` or ``:name`` placeholders
            params: Positional sequence or mapping of named values

        Returns:
            ExecResult with the last inserted rowid and affected row count

        Raises:
            StorageError: Malformed statement or violated constraint
        """
        def collect(result):
            return ExecResult(
                generated_id=result.lastrowid,
                affected_rows=max(result.rowcount, 0),
            )

        return await self._run(statement, params, collect)

    async def fetch_all(self, statement: str, params: Params = None) -> list[Row]:
        """
        Run a read statement and return every row in store order.

        An empty result is an empty list, never an error.

        Raises:
            StorageError: Malformed statement or missing table
        """
        def collect(result):
            return [dict(row) for row in result.mappings().all()]

        return await self._run(statement, params, collect)

    async def fetch_one(self, statement: str, params: Params = None) -> Optional[Row]:
        """
        Run a read statement and return its first row.

        Returns:
            Row as a dict, or None when nothing matched

        Raises:
            StorageError: Malformed statement or missing table
        """
        def collect(result):
            row = result.mappings().first()
            return dict(row) if row is not None else None

        return await self._run(statement, params, collect)

    async def _run(self, statement: str, params: Params, collect):
        bound = _bind(params)
        async with self._lock:
            if self.engine is None:
                raise StorageError("storage is closed")

            start = time.perf_counter()
            try:
                async with self.engine.begin() as conn:
                    result = await conn.exec_driver_sql(statement, bound)
                    value = collect(result)
            except SQLAlchemyError as e:
                raise StorageError(str(getattr(e, "orig", None) or e)) from e

        logger.debug(
            "Executed statement",
            extra={
                "statement": " ".join(statement.split()),
                "param_count": len(bound),
                "latency_ms": round((time.perf_counter() - start) * 1000, 3),
            },
        )
        return value

