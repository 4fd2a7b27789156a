r"""Retry policies deciding whether another attempt is permitted.

This package provides the ``RetryPolicy`` abstract base class and its
implementations: never retry, always retry, retry a bounded number of
times on retryable exceptions, retry within a time budget, and
combinations of those.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "AlwaysRetryPolicy",
    "CompositeRetryPolicy",
    "MaxAttemptsRetryPolicy",
    "NeverRetryPolicy",
    "RetryPolicy",
    "SimpleRetryPolicy",
    "TimeoutRetryPolicy",
]

from retrykit.policy.always import AlwaysRetryPolicy
from retrykit.policy.base import RetryPolicy
from retrykit.policy.composite import CompositeRetryPolicy
from retrykit.policy.max_attempts import MaxAttemptsRetryPolicy
from retrykit.policy.never import NeverRetryPolicy
from retrykit.policy.simple import DEFAULT_MAX_ATTEMPTS, SimpleRetryPolicy
from retrykit.policy.timeout import TimeoutRetryPolicy
