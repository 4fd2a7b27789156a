r"""Exceptions raised by the retry template.

The hierarchy separates the ordinary exhaustion envelope from the
terminal errors that abort the retry loop without trying again:

- ``RetryError``: retries were exhausted, wraps the last failure
- ``TerminatedRetryError``: the loop was abandoned (failure registration
  failed or a listener vetoed the execution)
- ``BackOffInterruptedError``: the back-off wait was interrupted
- ``IllegalExhaustedStateError``: the policy stopped before any attempt
  failed, which indicates a broken policy implementation
"""

from __future__ import annotations

__all__ = [
    "BackOffInterruptedError",
    "IllegalExhaustedStateError",
    "RetryError",
    "TerminatedRetryError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class RetryError(RuntimeError):
    """Exception raised when a unit of work could not be completed by
    retrying.

    Args:
        message: A descriptive error message.
        cause: The original exception, if any. It is also chained as
            ``__cause__``.

    Example:
        ```pycon
        >>> from retrykit.exceptions import RetryError
        >>> error = RetryError("Retry failed after 3 attempt(s)", cause=ValueError("boom"))
        >>> error.cause
        ValueError('boom')

        ```
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message


class TerminatedRetryError(RetryError):
    """Exception raised when the retry loop is abandoned before the retry
    policy is exhausted.

    Retries and recovery are both skipped when this error is raised.
    """


class BackOffInterruptedError(TerminatedRetryError):
    """Exception raised when a back-off wait is interrupted.

    Example:
        ```pycon
        >>> from retrykit.exceptions import BackOffInterruptedError, TerminatedRetryError
        >>> isinstance(BackOffInterruptedError("interrupted"), TerminatedRetryError)
        True

        ```
    """


class IllegalExhaustedStateError(RetryError):
    """Exception raised when the retry loop ends without any recorded
    failure.

    Args:
        context: The retry context at the time the loop ended.
    """

    def __init__(self, context: RetryContext) -> None:
        super().__init__(
            "Retry policy exhausted before any attempt was made "
            f"(retry_count={context.retry_count})"
        )
        self.context = context
