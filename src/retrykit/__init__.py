r"""retrykit - Declarative retry execution for Python.

This package runs a unit of work and, when it fails, decides whether to
try again, how long to wait between attempts and what to do once
retries are exhausted. Retry decisions and waiting are pluggable
policies, so transient-failure handling is configured once instead of
being hand-rolled at each call site.

Key Features:
    - ``RetryTemplate`` execution loop with guaranteed context cleanup
    - Retry policies: never, always, bounded attempts with retryable
      exception kinds, time budget, and compositions of those
    - Back-off policies: none, fixed, exponential, random, and an
      httpx ``Retry-After`` aware policy
    - Recovery callbacks invoked once retries are exhausted
    - Listeners for logging, metrics and alerting
    - ``@retryable`` decorator and ``RetryConfig`` declarative setup

Example:
    ```pycon
    >>> from retrykit import RetryTemplate
    >>> from retrykit.backoff import FixedBackOffPolicy
    >>> from retrykit.policy import SimpleRetryPolicy
    >>> template = RetryTemplate(
    ...     retry_policy=SimpleRetryPolicy(max_attempts=3, retryable=(ConnectionError,)),
    ...     backoff_policy=FixedBackOffPolicy(period=0.0),
    ... )
    >>> template.execute(lambda context: "ok")
    'ok'
    >>> template.execute_with_recovery(
    ...     lambda context: 1 / 0, lambda context: "fallback"
    ... )
    'fallback'

    ```
"""

from __future__ import annotations

__all__ = [
    "BackOffInterruptedError",
    "BackOffPolicy",
    "IllegalExhaustedStateError",
    "RecoveryCallback",
    "RetryCallback",
    "RetryConfig",
    "RetryContext",
    "RetryError",
    "RetryListener",
    "RetryOperations",
    "RetryPolicy",
    "RetryTemplate",
    "TerminatedRetryError",
    "__version__",
    "retryable",
]

from importlib.metadata import PackageNotFoundError, version

from retrykit.backoff import BackOffPolicy
from retrykit.callbacks import RecoveryCallback, RetryCallback
from retrykit.config import RetryConfig
from retrykit.context import RetryContext
from retrykit.decorator import retryable
from retrykit.exceptions import (
    BackOffInterruptedError,
    IllegalExhaustedStateError,
    RetryError,
    TerminatedRetryError,
)
from retrykit.listeners import RetryListener
from retrykit.policy import RetryPolicy
from retrykit.template import RetryOperations, RetryTemplate

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
