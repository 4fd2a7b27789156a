r"""Uniform random back-off policy."""

from __future__ import annotations

__all__ = ["UniformRandomBackOffPolicy"]

import random
from typing import TYPE_CHECKING

from retrykit.backoff.base import SleepingBackOffPolicy
from retrykit.utils.validation import validate_non_negative

if TYPE_CHECKING:
    from retrykit.backoff.sleeper import Sleeper


class UniformRandomBackOffPolicy(SleepingBackOffPolicy):
    """Back-off policy that waits a random delay in
    ``[min_period, max_period]``.

    Random delays spread the retries of concurrent clients that failed
    at the same time.

    Args:
        min_period: Lower bound of the delay in seconds (default: 0.5).
        max_period: Upper bound of the delay in seconds (default: 1.5).
            Must be >= ``min_period``.
        sleeper: The sleeper used to wait. Defaults to ``ThreadSleeper``.
    """

    def __init__(
        self,
        min_period: float = 0.5,
        max_period: float = 1.5,
        sleeper: Sleeper | None = None,
    ) -> None:
        validate_non_negative("min_period", min_period)
        if max_period < min_period:
            msg = f"max_period must be >= min_period ({min_period}), got {max_period}"
            raise ValueError(msg)
        super().__init__(sleeper)
        self.min_period = min_period
        self.max_period = max_period

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(min_period={self.min_period}, "
            f"max_period={self.max_period})"
        )

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return random.uniform(self.min_period, self.max_period)  # noqa: S311
