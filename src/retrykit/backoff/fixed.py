r"""Fixed back-off policy."""

from __future__ import annotations

__all__ = ["FixedBackOffPolicy"]

from typing import TYPE_CHECKING

from retrykit.backoff.base import SleepingBackOffPolicy
from retrykit.utils.validation import validate_non_negative

if TYPE_CHECKING:
    from retrykit.backoff.sleeper import Sleeper


class FixedBackOffPolicy(SleepingBackOffPolicy):
    """Back-off policy that waits the same delay between attempts.

    Args:
        period: The delay in seconds (default: 1.0). Must be >= 0.
        sleeper: The sleeper used to wait. Defaults to ``ThreadSleeper``.

    Example:
        ```pycon
        >>> from retrykit.backoff import FixedBackOffPolicy
        >>> backoff = FixedBackOffPolicy(period=2.5)
        >>> backoff.calculate(0)
        2.5
        >>> backoff.calculate(10)
        2.5

        ```
    """

    def __init__(self, period: float = 1.0, sleeper: Sleeper | None = None) -> None:
        validate_non_negative("period", period)
        super().__init__(sleeper)
        self.period = period

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(period={self.period})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.period
