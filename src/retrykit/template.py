r"""Retry template executing a unit of work with retry and back-off.

This module provides the ``RetryOperations`` interface and its
implementation ``RetryTemplate``, which ties a ``RetryPolicy``, a
``BackOffPolicy`` and optional ``RetryListener``s together into one
execution loop.
"""

from __future__ import annotations

__all__ = ["RetryOperations", "RetryTemplate"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

from retrykit.backoff import BackOffPolicy, NoBackOffPolicy
from retrykit.exceptions import (
    BackOffInterruptedError,
    IllegalExhaustedStateError,
    RetryError,
    TerminatedRetryError,
)
from retrykit.listeners import ListenerManager, RetryListener
from retrykit.policy import RetryPolicy, SimpleRetryPolicy
from retrykit.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Iterable

    from retrykit.callbacks import RecoveryCallback, RetryCallback
    from retrykit.config import RetryConfig
    from retrykit.context import RetryContext

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryOperations(ABC):
    """Interface of objects executing a callback with retry."""

    @abstractmethod
    def execute(self, callback: RetryCallback[T]) -> T:
        """Execute ``callback`` until it succeeds or retries are exhausted.

        Args:
            callback: The unit of work. It receives the retry context.

        Returns:
            The value returned by the first successful call.

        Raises:
            RetryError: If retries are exhausted or the loop is terminated.
        """

    @abstractmethod
    def execute_with_recovery(
        self, callback: RetryCallback[T], recovery: RecoveryCallback[T]
    ) -> T:
        """Execute ``callback`` and fall back on ``recovery`` once retries
        are exhausted.

        Args:
            callback: The unit of work. It receives the retry context.
            recovery: The fallback. It receives the exhausted context.

        Returns:
            The value returned by the first successful call, or the value
            returned by ``recovery``.

        Raises:
            TerminatedRetryError: If the loop is terminated.
            Exception: Any exception raised by ``recovery``, unwrapped.
        """


class RetryTemplate(RetryOperations):
    """Executes callbacks with retry.

    One execution runs as follows:

    1. The retry policy opens a fresh context and the back-off policy is
       started on it.
    2. While the retry policy permits another attempt, the callback is
       called. A returned value ends the execution.
    3. A failed attempt is registered with the retry policy. If another
       attempt is permitted the back-off policy waits, otherwise the loop
       ends.
    4. Once exhausted, the recovery callback is called if one was given.
       Otherwise the last failure is raised, wrapped in ``RetryError``
       unless it already is one.

    The context is closed exactly once, whatever the outcome. Only
    ``Exception`` subclasses are retried: ``KeyboardInterrupt`` and
    ``SystemExit`` propagate immediately.

    The template keeps no per-execution state, so one instance can run
    concurrent executions from several threads.

    Args:
        retry_policy: The retry policy. Defaults to
            ``SimpleRetryPolicy(max_attempts=3)``, which retries any
            ``Exception``.
        backoff_policy: The back-off policy. Defaults to
            ``NoBackOffPolicy()``.
        listeners: Listeners notified of the retry lifecycle.
        throw_last_failure_on_exhausted: If True, the last failure is
            raised as is on exhaustion instead of being wrapped in
            ``RetryError``.

    Example:
        ```pycon
        >>> from retrykit import RetryTemplate
        >>> from retrykit.policy import SimpleRetryPolicy
        >>> template = RetryTemplate(retry_policy=SimpleRetryPolicy(max_attempts=5))
        >>> calls = []
        >>> def callback(context):
        ...     calls.append(context.retry_count)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unreachable")
        ...     return "done"
        ...
        >>> template.execute(callback)
        'done'
        >>> calls
        [0, 1, 2]
        >>> template.execute_with_recovery(
        ...     lambda context: 1 / 0, lambda context: type(context.last_failure).__name__
        ... )
        'ZeroDivisionError'

        ```
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        backoff_policy: BackOffPolicy | None = None,
        listeners: Iterable[RetryListener] = (),
        throw_last_failure_on_exhausted: bool = False,
    ) -> None:
        self.retry_policy: RetryPolicy = (
            retry_policy if retry_policy is not None else SimpleRetryPolicy()
        )
        self.backoff_policy: BackOffPolicy = (
            backoff_policy if backoff_policy is not None else NoBackOffPolicy()
        )
        self.listeners = ListenerManager(listeners)
        self.throw_last_failure_on_exhausted = throw_last_failure_on_exhausted

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retry_policy={self.retry_policy!r}, "
            f"backoff_policy={self.backoff_policy!r}, listeners={len(self.listeners)})"
        )

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryTemplate:
        """Create a template from a ``RetryConfig``.

        Args:
            config: The retry configuration.

        Returns:
            The configured template.
        """
        return cls(
            retry_policy=config.build_retry_policy(),
            backoff_policy=config.build_backoff_policy(),
            throw_last_failure_on_exhausted=config.throw_last_failure_on_exhausted,
        )

    def register_listener(self, listener: RetryListener) -> None:
        """Append a listener to the listeners of this template.

        Args:
            listener: The listener to register.
        """
        self.listeners.register(listener)

    def execute(self, callback: RetryCallback[T]) -> T:
        return self._do_execute(callback, None)

    def execute_with_recovery(
        self, callback: RetryCallback[T], recovery: RecoveryCallback[T]
    ) -> T:
        return self._do_execute(callback, recovery)

    def _do_execute(
        self, callback: RetryCallback[T], recovery: RecoveryCallback[T] | None
    ) -> T:
        retry_policy = self.retry_policy
        backoff_policy = self.backoff_policy
        context = retry_policy.open()
        error: BaseException | None = None
        try:
            if not self.listeners.open(context):
                msg = "Retry terminated abnormally by listener"
                raise TerminatedRetryError(msg)
            backoff_policy.start(context)

            while retry_policy.can_retry(context):
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"Attempt {context.retry_count + 1} of {callback!r}",
                    retry_count=context.retry_count,
                )
                try:
                    result = callback(context)
                except Exception as exc:
                    self._register_failure(retry_policy, context, exc)
                    self.listeners.on_error(context, exc)
                    if retry_policy.can_retry(context):
                        self._back_off(backoff_policy, context)
                    else:
                        log_structured(
                            logger,
                            logging.DEBUG,
                            f"Retry policy refused another attempt after {exc!r}",
                            retry_count=context.retry_count,
                            failure_type=type(exc).__name__,
                        )
                else:
                    self.listeners.on_success(context, result)
                    return result

            return self._handle_retry_exhausted(context, recovery)
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._close(retry_policy, context, error)

    def _register_failure(
        self, retry_policy: RetryPolicy, context: RetryContext, failure: Exception
    ) -> None:
        try:
            retry_policy.register_failure(context, failure)
        except Exception as exc:
            msg = "Could not register failure"
            raise TerminatedRetryError(msg, cause=exc) from exc
        log_structured(
            logger,
            logging.DEBUG,
            f"Attempt {context.retry_count} failed: {failure!r}",
            retry_count=context.retry_count,
            failure_type=type(failure).__name__,
        )

    def _back_off(self, backoff_policy: BackOffPolicy, context: RetryContext) -> None:
        try:
            backoff_policy.back_off(context)
        except BackOffInterruptedError:
            logger.debug(f"Back-off interrupted after {context.retry_count} attempt(s)")
            raise
        except Exception as exc:
            logger.debug(f"Back-off interrupted after {context.retry_count} attempt(s)")
            msg = "Abort retry because interrupted"
            raise BackOffInterruptedError(msg, cause=exc) from exc

    def _handle_retry_exhausted(
        self, context: RetryContext, recovery: RecoveryCallback[T] | None
    ) -> T:
        failure = context.last_failure
        if failure is None:
            raise IllegalExhaustedStateError(context)

        if recovery is not None:
            logger.debug(
                f"Retry exhausted after {context.retry_count} attempt(s), calling recovery"
            )
            return recovery(context)

        logger.debug(f"Retry exhausted after {context.retry_count} attempt(s): {failure!r}")
        if self.throw_last_failure_on_exhausted or isinstance(failure, RetryError):
            raise failure
        msg = f"Retry failed after {context.retry_count} attempt(s): {failure}"
        raise RetryError(msg, cause=failure) from failure

    def _close(
        self, retry_policy: RetryPolicy, context: RetryContext, error: BaseException | None
    ) -> None:
        try:
            self.listeners.close(context, error)
        finally:
            try:
                retry_policy.close(context)
            finally:
                context.mark_closed()
