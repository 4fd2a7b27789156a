r"""Retry policy bounded by the number of attempts only."""

from __future__ import annotations

__all__ = ["MaxAttemptsRetryPolicy"]

from typing import TYPE_CHECKING

from retrykit.policy.base import RetryPolicy
from retrykit.policy.simple import DEFAULT_MAX_ATTEMPTS
from retrykit.utils.validation import validate_max_attempts

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class MaxAttemptsRetryPolicy(RetryPolicy):
    """Retry policy that retries any failure up to ``max_attempts``
    attempts.

    Unlike ``SimpleRetryPolicy`` the exception kind is never inspected,
    which makes this policy a convenient building block for
    ``CompositeRetryPolicy``.

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be >= 1. Default is 3.

    Raises:
        ValueError: If ``max_attempts`` is lower than 1.
    """

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        validate_max_attempts(max_attempts)
        self.max_attempts = max_attempts

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_attempts={self.max_attempts})"

    def can_retry(self, context: RetryContext) -> bool:
        return not context.exhausted_only and context.retry_count < self.max_attempts
