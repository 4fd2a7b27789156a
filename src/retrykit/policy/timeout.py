r"""Retry policy bounded by elapsed time."""

from __future__ import annotations

__all__ = ["TimeoutRetryPolicy"]

import time
from typing import TYPE_CHECKING

from retrykit.policy.base import RetryPolicy
from retrykit.utils.validation import validate_positive

if TYPE_CHECKING:
    from retrykit.context import RetryContext

START_TIME_ATTRIBUTE = "timeout_retry_policy.start"


class TimeoutRetryPolicy(RetryPolicy):
    """Retry policy that retries until a time budget has elapsed.

    The budget starts when the context is opened and is checked before
    each attempt. A running attempt is never interrupted.

    Args:
        timeout: Time budget in seconds. Must be > 0.

    Raises:
        ValueError: If ``timeout`` is not positive.
    """

    def __init__(self, timeout: float) -> None:
        validate_positive("timeout", timeout)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(timeout={self.timeout})"

    def open(self, parent: RetryContext | None = None) -> RetryContext:
        context = super().open(parent)
        context.attributes[START_TIME_ATTRIBUTE] = time.monotonic()
        return context

    def can_retry(self, context: RetryContext) -> bool:
        if context.exhausted_only:
            return False
        start = context.attributes.get(START_TIME_ATTRIBUTE)
        if start is None:
            # Context not opened by this policy
            return True
        return time.monotonic() - start < self.timeout
