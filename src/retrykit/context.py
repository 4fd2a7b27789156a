r"""Mutable state for one retry execution.

A ``RetryContext`` is created by ``RetryPolicy.open`` at the start of an
execution, handed to every callback, policy and listener, and closed
exactly once when the execution ends.
"""

from __future__ import annotations

__all__ = ["RetryContext"]

from typing import Any


class RetryContext:
    """State of one logical sequence of attempts.

    Args:
        parent: Optional context of an enclosing execution.

    Attributes:
        parent: The context of the enclosing execution, or None.
        attributes: Auxiliary state owned by policies (back-off timing,
            start time, child contexts). The template never reads it.

    Example:
        ```pycon
        >>> from retrykit.context import RetryContext
        >>> context = RetryContext()
        >>> context.retry_count
        0
        >>> context.record_failure(ValueError("boom"))
        >>> context.retry_count
        1
        >>> context.last_failure
        ValueError('boom')

        ```
    """

    def __init__(self, parent: RetryContext | None = None) -> None:
        self.parent = parent
        self.attributes: dict[str, Any] = {}
        self._retry_count = 0
        self._last_failure: BaseException | None = None
        self._exhausted_only = False
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retry_count={self._retry_count}, "
            f"last_failure={self._last_failure!r}, exhausted_only={self._exhausted_only})"
        )

    @property
    def retry_count(self) -> int:
        """The number of failed attempts recorded so far."""
        return self._retry_count

    @property
    def last_failure(self) -> BaseException | None:
        """The most recent failure, or None if no attempt failed."""
        return self._last_failure

    @property
    def exhausted_only(self) -> bool:
        """Whether retrying has been forbidden for this execution."""
        return self._exhausted_only

    @property
    def closed(self) -> bool:
        """Whether the template has closed this context."""
        return self._closed

    def record_failure(self, failure: BaseException) -> None:
        """Record a failed attempt.

        Args:
            failure: The exception raised by the attempt.
        """
        self._retry_count += 1
        self._last_failure = failure

    def set_exhausted_only(self) -> None:
        """Forbid any further attempt for this execution.

        Policies report ``can_retry() == False`` once this flag is set,
        which lets a callback stop the loop without raising a
        non-retryable exception.
        """
        self._exhausted_only = True

    def mark_closed(self) -> None:
        self._closed = True
