"""
Structured JSON logging configuration.

This module sets up application-wide JSON logging with:
- Consistent field names across all logs
- Operation names for repository calls
- Table, user and order identifiers where known
- Statement latency and affected row counts

Logs are output to stdout in JSON format for easy parsing by
log aggregation systems.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Attributes present on every LogRecord; anything else came in via ``extra``.
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
})


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs log records as single-line JSON objects with consistent fields:
    - timestamp: ISO 8601 format with microseconds (UTC)
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - message: Log message
    - logger: Logger name (module path)
    - operation: Repository operation name (if available)
    - table: Table the statement touched (if available)
    - user_id / order_id: Domain identifiers (if available)
    - affected_rows: Rows changed by a statement (if available)
    - latency_ms: Statement latency in milliseconds (if available)
    - exception: Exception details (if exception occurred)
    - extra: Any additional fields from log record

    Example output:
        {"timestamp": "2026-10-19T10:30:00.123456+00:00", "level": "ERROR",
         "message": "Storage failure", "logger": "fakestore.repositories.users",
         "operation": "create_user"}
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON string.

        Args:
            record: LogRecord to format

        Returns:
            JSON string representation of log record
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        # Known context fields first so they keep a stable position
        for field in ("operation", "table", "user_id", "order_id", "affected_rows", "latency_ms"):
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True
) -> None:
    """
    Configure application logging.

    Sets up:
    - Root logger with specified level
    - JSON formatter (if json_format=True)
    - StreamHandler to stdout
    - Removes default handlers

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatter (True) or simple formatter (False)

    Note:
        Call this once at process startup, before any logging occurs.
    """
    root_logger = logging.getLogger()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance with given name.

    Args:
        name: Logger name (usually __name__ of the module)

    Example:
        logger = get_logger(__name__)
        logger.error("Storage failure", extra={"operation": "get_cart"})
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    operation: Optional[str] = None,
    table: Optional[str] = None,
    user_id: Optional[int] = None,
    order_id: Optional[int] = None,
    affected_rows: Optional[int] = None,
    latency_ms: Optional[float] = None,
    **extra_fields: Any
) -> None:
    """
    Log message with structured context fields.

    Fields left as None are omitted from the record.

    Example:
        log_with_context(
            logger,
            "info",
            "Order created",
            operation="create_order",
            user_id=7,
            order_id=42,
        )
    """
    extra: Dict[str, Any] = {
        key: value
        for key, value in (
            ("operation", operation),
            ("table", table),
            ("user_id", user_id),
            ("order_id", order_id),
            ("affected_rows", affected_rows),
            ("latency_ms", latency_ms),
        )
        if value is not None
    }
    extra.update(extra_fields)

    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra)
