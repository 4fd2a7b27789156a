r"""Utility functions for retry policies and the retry template."""

from __future__ import annotations

__all__ = [
    "parse_retry_after",
    "validate_backoff_params",
    "validate_max_attempts",
    "validate_non_negative",
    "validate_positive",
]

from retrykit.utils.retry_after import parse_retry_after
from retrykit.utils.validation import (
    validate_backoff_params,
    validate_max_attempts,
    validate_non_negative,
    validate_positive,
)
