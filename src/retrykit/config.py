r"""Configuration dataclass and defaults for retry templates.

This module provides a declarative ``RetryConfig`` that can be kept in
application settings and turned into a ``RetryTemplate`` with
``RetryTemplate.from_config``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_PERIOD",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_INTERVAL",
    "RetryConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from retrykit.backoff import (
    BackOffPolicy,
    ExponentialBackOffPolicy,
    ExponentialRandomBackOffPolicy,
    FixedBackOffPolicy,
    NoBackOffPolicy,
)
from retrykit.policy import (
    DEFAULT_MAX_ATTEMPTS,
    CompositeRetryPolicy,
    RetryPolicy,
    SimpleRetryPolicy,
    TimeoutRetryPolicy,
)
from retrykit.utils.validation import (
    validate_backoff_params,
    validate_max_attempts,
    validate_positive,
)

if TYPE_CHECKING:
    from retrykit.backoff import Sleeper
    from retrykit.classifier import RetryableSpec

# Delay before the first retry. 0 disables back-off
DEFAULT_BACKOFF_PERIOD = 0.0

# Cap on exponential back-off delays
DEFAULT_MAX_INTERVAL = 30.0


@dataclass(frozen=True)
class RetryConfig:
    """Declarative retry configuration.

    The back-off policy is derived from ``backoff_period`` and
    ``multiplier``:

    - ``backoff_period == 0``: no back-off
    - ``multiplier == 1``: fixed back-off of ``backoff_period`` seconds
    - ``multiplier > 1``: exponential back-off starting at
      ``backoff_period`` and capped at ``max_interval``, randomized when
      ``random_backoff`` is True

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be >= 1.
        retryable: The retryable exception kinds, see
            ``ExceptionClassifier``. None makes every ``Exception``
            retryable.
        backoff_period: Delay before the first retry in seconds. Must be
            >= 0.
        multiplier: Growth factor of the delay. Must be >= 1.
        max_interval: Cap on exponential delays in seconds.
        random_backoff: Whether exponential delays are randomized.
        timeout: Optional time budget in seconds for all attempts. Must be
            > 0 if provided.
        throw_last_failure_on_exhausted: Whether the last failure is raised
            unwrapped once retries are exhausted.
        sleeper: Optional sleeper used by the back-off policy.

    Example:
        ```pycon
        >>> from retrykit.config import RetryConfig
        >>> config = RetryConfig(max_attempts=5, backoff_period=0.5, multiplier=2.0)
        >>> config.build_backoff_policy()
        ExponentialBackOffPolicy(initial_interval=0.5, multiplier=2.0, max_interval=30.0)
        >>> config.merge(max_attempts=2, timeout=None).max_attempts
        2

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retryable: RetryableSpec = None
    backoff_period: float = DEFAULT_BACKOFF_PERIOD
    multiplier: float = 1.0
    max_interval: float = DEFAULT_MAX_INTERVAL
    random_backoff: bool = False
    timeout: float | None = None
    throw_last_failure_on_exhausted: bool = False
    sleeper: Sleeper | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_max_attempts(self.max_attempts)
        validate_backoff_params(
            self.backoff_period,
            self.multiplier,
            self.max_interval if self.multiplier > 1 else None,
        )
        if self.timeout is not None:
            validate_positive("timeout", self.timeout)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with the given parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ``RetryConfig``. The original is unchanged.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Dictionary with one entry per parameter.
        """
        return {
            "max_attempts": self.max_attempts,
            "retryable": self.retryable,
            "backoff_period": self.backoff_period,
            "multiplier": self.multiplier,
            "max_interval": self.max_interval,
            "random_backoff": self.random_backoff,
            "timeout": self.timeout,
            "throw_last_failure_on_exhausted": self.throw_last_failure_on_exhausted,
            "sleeper": self.sleeper,
        }

    def build_retry_policy(self) -> RetryPolicy:
        """Create the retry policy described by this configuration.

        Returns:
            A ``SimpleRetryPolicy``, combined with a ``TimeoutRetryPolicy``
            when ``timeout`` is set.
        """
        policy: RetryPolicy = SimpleRetryPolicy(self.max_attempts, self.retryable)
        if self.timeout is not None:
            policy = CompositeRetryPolicy([policy, TimeoutRetryPolicy(self.timeout)])
        return policy

    def build_backoff_policy(self) -> BackOffPolicy:
        """Create the back-off policy described by this configuration.

        Returns:
            The back-off policy.
        """
        if self.backoff_period == 0:
            return NoBackOffPolicy()
        if self.multiplier == 1:
            return FixedBackOffPolicy(self.backoff_period, sleeper=self.sleeper)
        policy_cls = (
            ExponentialRandomBackOffPolicy if self.random_backoff else ExponentialBackOffPolicy
        )
        return policy_cls(
            initial_interval=self.backoff_period,
            multiplier=self.multiplier,
            max_interval=self.max_interval,
            sleeper=self.sleeper,
        )
