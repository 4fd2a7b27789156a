r"""Abstract base class for retry policies."""

from __future__ import annotations

__all__ = ["RetryPolicy"]

from abc import ABC, abstractmethod

from retrykit.context import RetryContext


class RetryPolicy(ABC):
    """Abstract base class for retry policies.

    A retry policy decides whether another attempt is permitted and owns
    the lifecycle of the ``RetryContext``. Policy instances hold
    configuration only: every piece of per-execution state lives in the
    context, so a single instance can be shared by concurrent executions.

    The lifecycle for one execution is:

    1. ``open()`` creates a fresh context
    2. ``can_retry(context)`` is checked before each attempt
    3. ``register_failure(context, failure)`` is called after each
       failed attempt
    4. ``close(context)`` is called exactly once when the execution ends
    """

    def open(self, parent: RetryContext | None = None) -> RetryContext:
        """Create a fresh context for a new execution.

        Args:
            parent: Optional context of an enclosing execution.

        Returns:
            The new context.
        """
        return RetryContext(parent)

    @abstractmethod
    def can_retry(self, context: RetryContext) -> bool:
        """Return whether another attempt is permitted.

        This method must not modify the context and may be called any
        number of times.

        Args:
            context: The context of the current execution.

        Returns:
            True if another attempt is permitted.
        """

    def register_failure(self, context: RetryContext, failure: BaseException) -> None:
        """Record a failed attempt in the context.

        Args:
            context: The context of the current execution.
            failure: The exception raised by the attempt.
        """
        context.record_failure(failure)

    def close(self, context: RetryContext) -> None:
        """Release any resource tied to ``context``.

        Args:
            context: The context of the execution that ended.
        """
