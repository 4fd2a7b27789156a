r"""Back-off policies controlling the delay between attempts.

This package provides the ``BackOffPolicy`` abstract base class, the
``NoBackOffPolicy`` default and fixed, exponential and random delay
policies, together with the sleepers they use to wait.
"""

from __future__ import annotations

__all__ = [
    "BackOffPolicy",
    "ExponentialBackOffPolicy",
    "ExponentialRandomBackOffPolicy",
    "FixedBackOffPolicy",
    "InterruptibleSleeper",
    "NoBackOffPolicy",
    "Sleeper",
    "SleepingBackOffPolicy",
    "ThreadSleeper",
    "UniformRandomBackOffPolicy",
]

from retrykit.backoff.base import BackOffPolicy, SleepingBackOffPolicy
from retrykit.backoff.exponential import (
    ExponentialBackOffPolicy,
    ExponentialRandomBackOffPolicy,
)
from retrykit.backoff.fixed import FixedBackOffPolicy
from retrykit.backoff.none import NoBackOffPolicy
from retrykit.backoff.sleeper import InterruptibleSleeper, Sleeper, ThreadSleeper
from retrykit.backoff.uniform import UniformRandomBackOffPolicy
