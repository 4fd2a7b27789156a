r"""Unit tests for the retry exceptions."""

from __future__ import annotations

import pytest

from retrykit.context import RetryContext
from retrykit.exceptions import (
    BackOffInterruptedError,
    IllegalExhaustedStateError,
    RetryError,
    TerminatedRetryError,
)


def test_retry_error_without_cause() -> None:
    error = RetryError("failed")
    assert str(error) == "failed"
    assert error.message == "failed"
    assert error.cause is None
    assert error.__cause__ is None


def test_retry_error_with_cause() -> None:
    cause = ValueError("boom")
    error = RetryError("failed", cause=cause)
    assert error.cause is cause
    assert error.__cause__ is cause


@pytest.mark.parametrize(
    "error_cls", [TerminatedRetryError, BackOffInterruptedError, IllegalExhaustedStateError]
)
def test_retry_error_subclasses(error_cls: type[RetryError]) -> None:
    assert issubclass(error_cls, RetryError)
    assert issubclass(error_cls, RuntimeError)


def test_backoff_interrupted_error_is_terminal() -> None:
    assert issubclass(BackOffInterruptedError, TerminatedRetryError)
    assert not issubclass(IllegalExhaustedStateError, TerminatedRetryError)


def test_illegal_exhausted_state_error() -> None:
    context = RetryContext()
    error = IllegalExhaustedStateError(context)
    assert error.context is context
    assert "retry_count=0" in str(error)
