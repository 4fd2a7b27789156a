r"""Callable types supplied by the caller of a retry template.

A retry callback performs the unit of work. It receives the current
``RetryContext`` and either returns a result or raises; raising feeds
the failure into the retry decision.

A recovery callback is called once retries are exhausted. It receives
the exhausted context, whose ``last_failure`` is the final failure, and
returns a fallback result or raises.
"""

from __future__ import annotations

__all__ = ["RecoveryCallback", "RetryCallback"]

from collections.abc import Callable
from typing import TypeVar

from retrykit.context import RetryContext

T = TypeVar("T")

RetryCallback = Callable[[RetryContext], T]
RecoveryCallback = Callable[[RetryContext], T]
