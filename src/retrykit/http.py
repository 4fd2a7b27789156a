r"""Retry helpers for httpx clients.

This module classifies httpx failures into transient and permanent ones
and provides a back-off policy honouring the ``Retry-After`` header.

Example:
    ```pycon
    >>> import httpx
    >>> from retrykit import RetryTemplate
    >>> from retrykit.http import RetryAfterBackOffPolicy, http_retry_policy
    >>> template = RetryTemplate(
    ...     retry_policy=http_retry_policy(max_attempts=5),
    ...     backoff_policy=RetryAfterBackOffPolicy(max_wait_time=10.0),
    ... )
    >>> def fetch(context):
    ...     with httpx.Client() as client:
    ...         response = client.get("https://api.example.com/data")
    ...         response.raise_for_status()
    ...         return response.json()
    ...
    >>> template.execute(fetch)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "RetryAfterBackOffPolicy",
    "http_retry_policy",
    "is_transient_http_error",
]

import functools
import logging
from typing import TYPE_CHECKING

import httpx

from retrykit.backoff import BackOffPolicy, ExponentialBackOffPolicy, ThreadSleeper
from retrykit.policy import DEFAULT_MAX_ATTEMPTS, SimpleRetryPolicy
from retrykit.utils.retry_after import parse_retry_after
from retrykit.utils.validation import validate_positive

if TYPE_CHECKING:
    from collections.abc import Collection

    from retrykit.backoff import Sleeper
    from retrykit.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def is_transient_http_error(
    failure: BaseException, status_forcelist: Collection[int] = RETRY_STATUS_CODES
) -> bool:
    """Return whether an httpx failure is worth retrying.

    Transport errors (timeouts, connection and network errors) are
    transient. ``httpx.HTTPStatusError`` raised by
    ``Response.raise_for_status`` is transient when its status code is in
    ``status_forcelist``. Anything else is permanent.

    Args:
        failure: The exception to classify.
        status_forcelist: Status codes considered transient.

    Returns:
        True if the failure is transient.

    Example:
        ```pycon
        >>> import httpx
        >>> from retrykit.http import is_transient_http_error
        >>> is_transient_http_error(httpx.ConnectTimeout("timed out"))
        True
        >>> request = httpx.Request("GET", "https://api.example.com")
        >>> response = httpx.Response(404, request=request)
        >>> is_transient_http_error(
        ...     httpx.HTTPStatusError("not found", request=request, response=response)
        ... )
        False

        ```
    """
    if isinstance(failure, httpx.TransportError):
        return True
    if isinstance(failure, httpx.HTTPStatusError):
        return failure.response.status_code in status_forcelist
    return False


def http_retry_policy(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    status_forcelist: Collection[int] = RETRY_STATUS_CODES,
) -> SimpleRetryPolicy:
    """Create a retry policy retrying transient httpx failures.

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be >= 1.
        status_forcelist: Status codes considered transient.

    Returns:
        A ``SimpleRetryPolicy`` using ``is_transient_http_error``.
    """
    return SimpleRetryPolicy(
        max_attempts,
        functools.partial(is_transient_http_error, status_forcelist=tuple(status_forcelist)),
    )


class RetryAfterBackOffPolicy(BackOffPolicy):
    """Back-off policy honouring the ``Retry-After`` response header.

    When the last failure is an ``httpx.HTTPStatusError`` whose response
    carries a parsable ``Retry-After`` header, the policy waits for that
    delay. Otherwise it delegates to another back-off policy.

    Args:
        delegate: The back-off policy used without ``Retry-After``.
            Defaults to ``ExponentialBackOffPolicy()``.
        max_wait_time: Optional cap in seconds on ``Retry-After`` delays.
            Must be > 0 if provided.
        sleeper: The sleeper used to wait for ``Retry-After`` delays.
            Defaults to ``ThreadSleeper``.
    """

    def __init__(
        self,
        delegate: BackOffPolicy | None = None,
        max_wait_time: float | None = None,
        sleeper: Sleeper | None = None,
    ) -> None:
        if max_wait_time is not None:
            validate_positive("max_wait_time", max_wait_time)
        self.delegate: BackOffPolicy = (
            delegate if delegate is not None else ExponentialBackOffPolicy()
        )
        self.max_wait_time = max_wait_time
        self.sleeper: Sleeper = sleeper if sleeper is not None else ThreadSleeper()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(delegate={self.delegate!r}, "
            f"max_wait_time={self.max_wait_time})"
        )

    def start(self, context: RetryContext) -> None:
        self.delegate.start(context)

    def back_off(self, context: RetryContext) -> None:
        delay = self._retry_after(context.last_failure)
        if delay is None:
            self.delegate.back_off(context)
            return
        if self.max_wait_time is not None and delay > self.max_wait_time:
            logger.debug(
                f"Capping Retry-After delay from {delay:.2f}s to {self.max_wait_time:.2f}s"
            )
            delay = self.max_wait_time
        logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        self.sleeper.sleep(delay)

    @staticmethod
    def _retry_after(failure: BaseException | None) -> float | None:
        if not isinstance(failure, httpx.HTTPStatusError):
            return None
        return parse_retry_after(failure.response.headers.get("Retry-After"))
