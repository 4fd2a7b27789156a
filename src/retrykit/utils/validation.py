r"""Parameter validation utilities for retry and back-off policies.

This module provides validation functions to ensure configuration values
meet their constraints before a policy or template is built from them.
"""

from __future__ import annotations

__all__ = [
    "validate_backoff_params",
    "validate_max_attempts",
    "validate_non_negative",
    "validate_positive",
]


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the maximum number of attempts.

    Args:
        max_attempts: Maximum number of attempts, including the first one.
            Must be >= 1.

    Raises:
        ValueError: If ``max_attempts`` is lower than 1.

    Example:
        ```pycon
        >>> from retrykit.utils.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(0)
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 1, got 0

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a numeric parameter is >= 0.

    Args:
        name: The parameter name used in the error message.
        value: The value to validate.

    Raises:
        ValueError: If ``value`` is negative.
    """
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)


def validate_positive(name: str, value: float) -> None:
    """Validate that a numeric parameter is > 0.

    Args:
        name: The parameter name used in the error message.
        value: The value to validate.

    Raises:
        ValueError: If ``value`` is zero or negative.
    """
    if value <= 0:
        msg = f"{name} must be > 0, got {value}"
        raise ValueError(msg)


def validate_backoff_params(
    initial_interval: float,
    multiplier: float = 1.0,
    max_interval: float | None = None,
) -> None:
    """Validate exponential back-off parameters.

    Args:
        initial_interval: First delay in seconds. Must be >= 0.
        multiplier: Growth factor between consecutive delays. Must be >= 1.
        max_interval: Optional delay cap in seconds. Must be > 0 and
            >= ``initial_interval`` if provided.

    Raises:
        ValueError: If a parameter violates its constraint.

    Example:
        ```pycon
        >>> from retrykit.utils.validation import validate_backoff_params
        >>> validate_backoff_params(0.1, multiplier=2.0, max_interval=30.0)
        >>> validate_backoff_params(0.1, multiplier=0.5)
        Traceback (most recent call last):
        ...
        ValueError: multiplier must be >= 1, got 0.5

        ```
    """
    validate_non_negative("initial_interval", initial_interval)
    if multiplier < 1:
        msg = f"multiplier must be >= 1, got {multiplier}"
        raise ValueError(msg)
    if max_interval is not None:
        validate_positive("max_interval", max_interval)
        if max_interval < initial_interval:
            msg = (
                f"max_interval must be >= initial_interval ({initial_interval}), "
                f"got {max_interval}"
            )
            raise ValueError(msg)
