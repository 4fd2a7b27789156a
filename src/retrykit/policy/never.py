r"""Retry policy that never retries."""

from __future__ import annotations

__all__ = ["NeverRetryPolicy"]

from typing import TYPE_CHECKING

from retrykit.policy.base import RetryPolicy

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class NeverRetryPolicy(RetryPolicy):
    """Retry policy that allows exactly one attempt.

    The first attempt is always permitted. Once a failure has been
    recorded no further attempt is permitted.

    Example:
        ```pycon
        >>> from retrykit.policy import NeverRetryPolicy
        >>> policy = NeverRetryPolicy()
        >>> context = policy.open()
        >>> policy.can_retry(context)
        True
        >>> policy.register_failure(context, ValueError("boom"))
        >>> policy.can_retry(context)
        False

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def can_retry(self, context: RetryContext) -> bool:
        return context.last_failure is None and not context.exhausted_only
