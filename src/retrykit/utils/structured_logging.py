r"""Structured logging utilities for machine-readable retry logs.

The retry template logs each attempt, failure and back-off through
``log_structured`` so that the retry state (``retry_count``,
``failure_type``...) is attached to the log record as extra fields.
Those fields are ignored by the default formatter and rendered as JSON
by ``StructuredFormatter``.

Example:
    Enable JSON output for retrykit:

    ```python
    import logging
    from retrykit.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("retrykit")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Tag every record of a unit of work with a correlation id:

    ```python
    from retrykit.utils.structured_logging import correlation_id

    with correlation_id("job-42"):
        template.execute(callback)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "retrykit_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Get the correlation id of the current context.

    Returns:
        The current correlation id, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(value: str) -> None:
    """Set the correlation id of the current context.

    The id is stored in a context variable, so it is isolated between
    threads and asyncio tasks.

    Args:
        value: The correlation id (request id, job id, trace id...).

    Example:
        ```pycon
        >>> from retrykit.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("job-1")
        >>> get_correlation_id()
        'job-1'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    _correlation_id.set(value)


def clear_correlation_id() -> None:
    """Clear the correlation id of the current context."""
    _correlation_id.set(None)


@contextmanager
def correlation_id(value: str) -> Generator[None, None, None]:
    """Set a correlation id for the duration of a ``with`` block.

    The previous value is restored on exit.

    Args:
        value: The correlation id.
    """
    token = _correlation_id.set(value)
    try:
        yield
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for retry logs.

    Each record is rendered as one JSON object with the fields
    ``timestamp``, ``level``, ``logger``, ``message``, ``module``,
    ``function`` and ``line``, the correlation id when one is set, the
    formatted exception when present, and every field passed through
    ``extra``. Values that are not JSON serializable are rendered with
    ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from retrykit.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("retrykit.doctest")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("attempt failed", extra={"retry_count": 2})
        >>> json.loads(stream.getvalue())["retry_count"]
        2

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation = get_correlation_id()
        if correlation is not None:
            log_data["correlation_id"] = correlation
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value
        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the record time as ISO 8601 UTC with milliseconds."""
        if datefmt is not None:
            return time.strftime(datefmt, time.gmtime(record.created))
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    Nothing is formatted when ``level`` is disabled for ``logger``.

    Args:
        logger: Logger to use.
        level: Log level (e.g. ``logging.DEBUG``).
        message: Log message.
        **extra: Structured fields attached to the record.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
