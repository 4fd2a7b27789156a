r"""Sleepers used by back-off policies to wait between attempts."""

from __future__ import annotations

__all__ = ["InterruptibleSleeper", "Sleeper", "ThreadSleeper"]

import logging
import threading
import time
from abc import ABC, abstractmethod

from retrykit.exceptions import BackOffInterruptedError

logger: logging.Logger = logging.getLogger(__name__)


class Sleeper(ABC):
    """Abstract base class for sleepers.

    A sleeper blocks the calling thread for a given duration. Sleepers
    that support interruption raise ``BackOffInterruptedError`` when the
    wait is cut short.
    """

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block the calling thread.

        Args:
            seconds: The duration of the wait in seconds.

        Raises:
            BackOffInterruptedError: If the wait was interrupted.
        """


class ThreadSleeper(Sleeper):
    """Sleeper based on ``time.sleep``.

    A ``KeyboardInterrupt`` received during the wait propagates as is.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class InterruptibleSleeper(Sleeper):
    """Sleeper that can be interrupted from another thread.

    Calling ``interrupt()`` wakes up the pending wait, which then raises
    ``BackOffInterruptedError``. The sleeper stays interrupted, so every
    later wait fails immediately, until ``reset()`` is called.

    Example:
        ```pycon
        >>> from retrykit.backoff import InterruptibleSleeper
        >>> sleeper = InterruptibleSleeper()
        >>> sleeper.sleep(0.0)
        >>> sleeper.interrupt()
        >>> sleeper.sleep(10.0)
        Traceback (most recent call last):
        ...
        retrykit.exceptions.BackOffInterruptedError: Sleep interrupted after 0.00s of 10.00s

        ```
    """

    def __init__(self) -> None:
        self._interrupted = threading.Event()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(interrupted={self.interrupted})"

    @property
    def interrupted(self) -> bool:
        return self._interrupted.is_set()

    def interrupt(self) -> None:
        """Interrupt the pending and future waits."""
        logger.debug("Interrupting sleeper")
        self._interrupted.set()

    def reset(self) -> None:
        """Clear the interrupted flag."""
        self._interrupted.clear()

    def sleep(self, seconds: float) -> None:
        start = time.monotonic()
        if self._interrupted.wait(timeout=seconds):
            elapsed = time.monotonic() - start
            msg = f"Sleep interrupted after {elapsed:.2f}s of {seconds:.2f}s"
            raise BackOffInterruptedError(msg)
