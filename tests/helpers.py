r"""Shared test helpers for retry template tests.

This module contains spy policies recording how the retry template
drives the retry context lifecycle and the back-off policy.
"""

from __future__ import annotations

__all__ = ["SpyBackOffPolicy", "SpyRetryPolicy", "failing_callback"]

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

from retrykit.backoff import BackOffPolicy
from retrykit.policy import RetryPolicy, SimpleRetryPolicy

if TYPE_CHECKING:
    from retrykit.context import RetryContext


class SpyRetryPolicy(RetryPolicy):
    """Retry policy delegating to another policy and recording the
    lifecycle calls."""

    def __init__(
        self,
        delegate: RetryPolicy | None = None,
        register_error: Exception | None = None,
    ) -> None:
        self.delegate = delegate if delegate is not None else SimpleRetryPolicy(max_attempts=3)
        self.register_error = register_error
        self.opened: list[RetryContext] = []
        self.closed: list[RetryContext] = []
        self.registered: list[BaseException] = []

    def open(self, parent: RetryContext | None = None) -> RetryContext:
        context = self.delegate.open(parent)
        self.opened.append(context)
        return context

    def can_retry(self, context: RetryContext) -> bool:
        return self.delegate.can_retry(context)

    def register_failure(self, context: RetryContext, failure: BaseException) -> None:
        if self.register_error is not None:
            raise self.register_error
        self.registered.append(failure)
        self.delegate.register_failure(context, failure)

    def close(self, context: RetryContext) -> None:
        self.closed.append(context)
        self.delegate.close(context)


class SpyBackOffPolicy(BackOffPolicy):
    """Back-off policy recording its calls, optionally raising on the
    n-th back-off."""

    def __init__(self, error: Exception | None = None, fail_on: int = 1) -> None:
        self.error = error
        self.fail_on = fail_on
        self.started: list[RetryContext] = []
        self.backoffs: list[int] = []

    def start(self, context: RetryContext) -> None:
        self.started.append(context)

    def back_off(self, context: RetryContext) -> None:
        self.backoffs.append(context.retry_count)
        if self.error is not None and len(self.backoffs) == self.fail_on:
            raise self.error


def failing_callback(*effects: Any) -> Mock:
    """Create a callback mock raising or returning ``effects`` in order.

    Exceptions in ``effects`` are raised, other values are returned.
    """
    return Mock(side_effect=list(effects))
