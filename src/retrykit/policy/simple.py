r"""Retry policy bounded by attempts and retryable exception kinds."""

from __future__ import annotations

__all__ = ["DEFAULT_MAX_ATTEMPTS", "SimpleRetryPolicy"]

from typing import TYPE_CHECKING

from retrykit.classifier import ExceptionClassifier
from retrykit.policy.base import RetryPolicy
from retrykit.utils.validation import validate_max_attempts

if TYPE_CHECKING:
    from retrykit.classifier import RetryableSpec
    from retrykit.context import RetryContext

# Total attempts, including the first one
DEFAULT_MAX_ATTEMPTS = 3


class SimpleRetryPolicy(RetryPolicy):
    """Retry policy that retries retryable failures a fixed number of
    times.

    Another attempt is permitted while fewer than ``max_attempts``
    failures have been recorded and the last failure (if any) is
    retryable. A non-retryable failure stops the loop even when attempts
    remain.

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be >= 1. Default is 3.
        retryable: The retryable exception kinds, see
            ``ExceptionClassifier``. ``None`` or an empty collection makes
            every ``Exception`` retryable.

    Raises:
        ValueError: If ``max_attempts`` is lower than 1.

    Example:
        ```pycon
        >>> from retrykit.policy import SimpleRetryPolicy
        >>> policy = SimpleRetryPolicy(max_attempts=3, retryable=(ConnectionError,))
        >>> context = policy.open()
        >>> policy.register_failure(context, ConnectionError())
        >>> policy.can_retry(context)
        True
        >>> policy.register_failure(context, ValueError())
        >>> policy.can_retry(context)
        False

        ```
    """

    def __init__(
        self, max_attempts: int = DEFAULT_MAX_ATTEMPTS, retryable: RetryableSpec = None
    ) -> None:
        validate_max_attempts(max_attempts)
        self.max_attempts = max_attempts
        self.classifier = ExceptionClassifier(retryable)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_attempts={self.max_attempts}, "
            f"classifier={self.classifier!r})"
        )

    def can_retry(self, context: RetryContext) -> bool:
        if context.exhausted_only or context.retry_count >= self.max_attempts:
            return False
        failure = context.last_failure
        return failure is None or self.classifier.classify(failure)
