r"""Listeners notified of the retry lifecycle.

Listeners hook into the execution of a ``RetryTemplate`` for logging,
metrics or alerting, and can veto an execution before the first attempt.

Example:
    ```pycon
    >>> from retrykit import RetryTemplate
    >>> from retrykit.listeners import RetryListener
    >>> class PrintingListener(RetryListener):
    ...     def on_error(self, context, failure):
    ...         print(f"attempt {context.retry_count} failed: {failure!r}")
    ...
    >>> template = RetryTemplate(listeners=[PrintingListener()])
    >>> attempts = iter([ValueError("boom"), "ok"])
    >>> def callback(context):
    ...     result = next(attempts)
    ...     if isinstance(result, Exception):
    ...         raise result
    ...     return result
    ...
    >>> template.execute(callback)
    attempt 1 failed: ValueError('boom')
    'ok'

    ```
"""

from __future__ import annotations

__all__ = ["ListenerManager", "RetryListener"]

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from retrykit.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)


class RetryListener:
    """Base class for retry listeners.

    Every hook is a no-op, so subclasses only override what they need.
    Errors raised by a hook propagate to the caller of the template.
    """

    def open(self, context: RetryContext) -> bool:  # noqa: ARG002
        """Called once before the first attempt.

        Args:
            context: The freshly opened context.

        Returns:
            False to veto the execution. The template then raises
            ``TerminatedRetryError`` without calling the callback.
        """
        return True

    def on_error(self, context: RetryContext, failure: BaseException) -> None:
        """Called after each failed attempt, once the failure has been
        registered.

        Args:
            context: The context of the execution.
            failure: The exception raised by the attempt.
        """

    def on_success(self, context: RetryContext, result: Any) -> None:
        """Called when an attempt succeeds.

        Args:
            context: The context of the execution.
            result: The value returned by the callback.
        """

    def close(self, context: RetryContext, failure: BaseException | None) -> None:
        """Called once when the execution ends, before the context is
        closed.

        Args:
            context: The context of the execution.
            failure: The error leaving the template, or None if the
                execution returned a result (including a recovered one).
        """


class ListenerManager:
    """Dispatches lifecycle events to an ordered list of listeners.

    ``open`` is dispatched in registration order, the other events in
    reverse order, so that the first registered listener wraps the others.

    Args:
        listeners: The initial listeners.
    """

    def __init__(self, listeners: Iterable[RetryListener] = ()) -> None:
        self.listeners: list[RetryListener] = list(listeners)

    def __len__(self) -> int:
        return len(self.listeners)

    def register(self, listener: RetryListener) -> None:
        self.listeners.append(listener)

    def open(self, context: RetryContext) -> bool:
        """Dispatch ``open`` and return False if any listener vetoed.

        Every listener is notified even when an earlier one vetoed.
        """
        allowed = True
        for listener in self.listeners:
            allowed = listener.open(context) and allowed
        return allowed

    def on_error(self, context: RetryContext, failure: BaseException) -> None:
        for listener in reversed(self.listeners):
            listener.on_error(context, failure)

    def on_success(self, context: RetryContext, result: Any) -> None:
        for listener in reversed(self.listeners):
            listener.on_success(context, result)

    def close(self, context: RetryContext, failure: BaseException | None) -> None:
        """Dispatch ``close`` to every listener.

        All listeners are closed even if one of them fails; the first
        error is raised once every listener has been closed.
        """
        error: Exception | None = None
        for listener in reversed(self.listeners):
            try:
                listener.close(context, failure)
            except Exception as exc:
                logger.debug(f"Failed to close listener {listener!r}: {exc}")
                if error is None:
                    error = exc
        if error is not None:
            raise error
