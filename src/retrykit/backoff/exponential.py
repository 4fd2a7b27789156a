r"""Exponential back-off policies."""

from __future__ import annotations

__all__ = ["ExponentialBackOffPolicy", "ExponentialRandomBackOffPolicy"]

import random
from typing import TYPE_CHECKING

from retrykit.backoff.base import SleepingBackOffPolicy
from retrykit.utils.validation import validate_backoff_params

if TYPE_CHECKING:
    from retrykit.backoff.sleeper import Sleeper


class ExponentialBackOffPolicy(SleepingBackOffPolicy):
    """Back-off policy with exponentially growing delays.

    Calculates delay as: initial_interval * (multiplier ** attempt),
    capped at max_interval.

    Args:
        initial_interval: The first delay in seconds (default: 0.1).
        multiplier: The growth factor (default: 2.0). Must be >= 1.
        max_interval: The delay cap in seconds (default: 30.0).
        sleeper: The sleeper used to wait. Defaults to ``ThreadSleeper``.

    Example:
        ```pycon
        >>> from retrykit.backoff import ExponentialBackOffPolicy
        >>> backoff = ExponentialBackOffPolicy(initial_interval=0.5, max_interval=3.0)
        >>> backoff.calculate(0)
        0.5
        >>> backoff.calculate(1)
        1.0
        >>> backoff.calculate(2)
        2.0
        >>> backoff.calculate(10)
        3.0

        ```
    """

    def __init__(
        self,
        initial_interval: float = 0.1,
        multiplier: float = 2.0,
        max_interval: float = 30.0,
        sleeper: Sleeper | None = None,
    ) -> None:
        validate_backoff_params(initial_interval, multiplier, max_interval)
        super().__init__(sleeper)
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_interval={self.initial_interval}, "
            f"multiplier={self.multiplier}, max_interval={self.max_interval})"
        )

    def calculate(self, attempt: int) -> float:
        try:
            delay = self.initial_interval * (self.multiplier**attempt)
        except OverflowError:
            return self.max_interval
        return min(delay, self.max_interval)


class ExponentialRandomBackOffPolicy(ExponentialBackOffPolicy):
    """Exponential back-off policy with a random factor.

    Each delay computed by ``ExponentialBackOffPolicy`` is multiplied by
    a random factor in ``[1, multiplier)`` and capped at max_interval.

    Args:
        initial_interval: The first delay in seconds (default: 0.1).
        multiplier: The growth factor (default: 2.0). Must be >= 1.
        max_interval: The delay cap in seconds (default: 30.0).
        sleeper: The sleeper used to wait. Defaults to ``ThreadSleeper``.
    """

    def calculate(self, attempt: int) -> float:
        delay = super().calculate(attempt)
        factor = random.uniform(1.0, self.multiplier)  # noqa: S311
        return min(delay * factor, self.max_interval)
