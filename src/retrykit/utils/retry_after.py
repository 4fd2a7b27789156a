r"""Retry-After header parsing utilities.

This module parses the ``Retry-After`` header of HTTP responses
according to RFC 9110.
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Parse a ``Retry-After`` header value into a delay in seconds.

    Two formats are accepted: a number of seconds (``"120"``) or an
    HTTP-date (``"Wed, 21 Oct 2015 07:28:00 GMT"``). Dates in the past
    give a delay of 0. Negative and non-finite numbers are rejected.

    Args:
        value: The header value, or None if the header is absent.
        now: Reference time for HTTP-dates. Defaults to the current UTC
            time.

    Returns:
        The delay in seconds, or None if the header is absent or cannot
        be parsed.

    Example:
        ```pycon
        >>> from retrykit.utils.retry_after import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if value is None:
        return None

    with suppress(ValueError):
        seconds = float(value)
        if math.isfinite(seconds) and seconds >= 0:
            return seconds
        logger.debug(f"Ignoring negative or non-finite Retry-After header: {value!r}")
        return None

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {value!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    now = now if now is not None else datetime.now(timezone.utc)
    return max(0.0, (retry_date - now).total_seconds())
