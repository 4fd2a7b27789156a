r"""Decorator adding retry to a function.

Example:
    ```pycon
    >>> from retrykit import retryable
    >>> attempts = []
    >>> @retryable(max_attempts=4, retry_on=(ConnectionError,))
    ... def fetch(key):
    ...     attempts.append(key)
    ...     if len(attempts) < 3:
    ...         raise ConnectionError("unreachable")
    ...     return key.upper()
    ...
    >>> fetch("abc")
    'ABC'
    >>> len(attempts)
    3

    ```
"""

from __future__ import annotations

__all__ = ["retryable"]

import functools
from typing import TYPE_CHECKING, Any, TypeVar, overload

from retrykit.policy import DEFAULT_MAX_ATTEMPTS, SimpleRetryPolicy
from retrykit.template import RetryTemplate

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from retrykit.backoff import BackOffPolicy
    from retrykit.classifier import RetryableSpec
    from retrykit.context import RetryContext
    from retrykit.listeners import RetryListener

T = TypeVar("T")


@overload
def retryable(func: Callable[..., T]) -> Callable[..., T]: ...


@overload
def retryable(
    *,
    max_attempts: int = ...,
    retry_on: RetryableSpec = ...,
    backoff: BackOffPolicy | None = ...,
    recover: Callable[..., T] | None = ...,
    listeners: Iterable[RetryListener] = ...,
) -> Callable[[Callable[..., T]], Callable[..., T]]: ...


def retryable(
    func: Callable[..., T] | None = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_on: RetryableSpec = None,
    backoff: BackOffPolicy | None = None,
    recover: Callable[..., T] | None = None,
    listeners: Iterable[RetryListener] = (),
) -> Any:
    """Wrap a function so that each call is executed with retry.

    Can be used bare (``@retryable``) or with arguments. One
    ``RetryTemplate`` is built per decorated function and shared by all
    its calls.

    Args:
        func: The function to wrap when used bare.
        max_attempts: Maximum number of attempts per call, including the
            first one. Must be >= 1.
        retry_on: The retryable exception kinds, see
            ``ExceptionClassifier``. None makes every ``Exception``
            retryable.
        backoff: Optional back-off policy. Defaults to no back-off.
        recover: Optional fallback called once retries are exhausted, with
            the exhausted context followed by the call arguments.
        listeners: Listeners notified of the retry lifecycle.

    Returns:
        The wrapped function, or a decorator when ``func`` is None.

    Raises:
        ValueError: If ``max_attempts`` is lower than 1.
    """
    template = RetryTemplate(
        retry_policy=SimpleRetryPolicy(max_attempts, retry_on),
        backoff_policy=backoff,
        listeners=listeners,
    )

    def decorator(function: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(function)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            def callback(context: RetryContext) -> T:  # noqa: ARG001
                return function(*args, **kwargs)

            if recover is None:
                return template.execute(callback)

            def recovery(context: RetryContext) -> T:
                return recover(context, *args, **kwargs)

            return template.execute_with_recovery(callback, recovery)

        wrapper.retry_template = template  # type: ignore[attr-defined]
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
