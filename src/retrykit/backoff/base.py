r"""Abstract base classes for back-off policies."""

from __future__ import annotations

__all__ = ["BackOffPolicy", "SleepingBackOffPolicy"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from retrykit.backoff.sleeper import Sleeper, ThreadSleeper

if TYPE_CHECKING:
    from retrykit.context import RetryContext

logger: logging.Logger = logging.getLogger(__name__)


class BackOffPolicy(ABC):
    """Abstract base class for back-off policies.

    A back-off policy controls the delay between a failed attempt and the
    next one. ``start`` is called once per execution before the first
    attempt, ``back_off`` between two attempts (never after the last
    one). Timing state is stored in the context, so a single instance can
    be shared by concurrent executions.
    """

    def start(self, context: RetryContext) -> None:
        """Initialize the back-off state of a new execution.

        Args:
            context: The context of the execution.
        """

    @abstractmethod
    def back_off(self, context: RetryContext) -> None:
        """Wait before the next attempt.

        Args:
            context: The context of the execution.

        Raises:
            BackOffInterruptedError: If the wait was interrupted.
        """


class SleepingBackOffPolicy(BackOffPolicy):
    """Base class for back-off policies that sleep for a computed delay.

    The index of the next back-off (0 for the wait after the first
    failure) is stored in the context and passed to ``calculate``.

    Args:
        sleeper: The sleeper used to wait. Defaults to ``ThreadSleeper``.
    """

    def __init__(self, sleeper: Sleeper | None = None) -> None:
        self.sleeper: Sleeper = sleeper if sleeper is not None else ThreadSleeper()

    @property
    def _attempt_key(self) -> str:
        return f"{self.__class__.__name__}.{id(self):x}.attempt"

    def start(self, context: RetryContext) -> None:
        context.attributes[self._attempt_key] = 0

    def back_off(self, context: RetryContext) -> None:
        attempt = context.attributes.get(self._attempt_key, 0)
        context.attributes[self._attempt_key] = attempt + 1
        delay = self.calculate(attempt)
        logger.debug(f"Waiting {delay:.2f}s before retry (back-off #{attempt + 1})")
        self.sleeper.sleep(delay)

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The back-off index (0-indexed). For example,
                attempt=0 is the wait after the first failure.

        Returns:
            The delay in seconds.
        """
