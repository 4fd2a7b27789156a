r"""Retry policy that always retries."""

from __future__ import annotations

__all__ = ["AlwaysRetryPolicy"]

from typing import TYPE_CHECKING

from retrykit.policy.base import RetryPolicy

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class AlwaysRetryPolicy(RetryPolicy):
    """Retry policy that retries without limit.

    The number of attempts is unbounded, so the failure rate has to be
    limited elsewhere, for example with a back-off policy or by calling
    ``context.set_exhausted_only()`` from the callback.

    Example:
        ```pycon
        >>> from retrykit.policy import AlwaysRetryPolicy
        >>> policy = AlwaysRetryPolicy()
        >>> context = policy.open()
        >>> for _ in range(100):
        ...     policy.register_failure(context, ValueError("boom"))
        ...
        >>> policy.can_retry(context)
        True

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def can_retry(self, context: RetryContext) -> bool:
        return not context.exhausted_only
