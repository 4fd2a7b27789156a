r"""Unit tests for SimpleRetryPolicy."""

from __future__ import annotations

import pytest

from retrykit.policy import DEFAULT_MAX_ATTEMPTS, SimpleRetryPolicy


def test_simple_retry_policy_defaults() -> None:
    policy = SimpleRetryPolicy()
    assert policy.max_attempts == DEFAULT_MAX_ATTEMPTS == 3
    assert policy.classifier.classify(ValueError())


def test_simple_retry_policy_can_retry_after_open() -> None:
    policy = SimpleRetryPolicy()
    context = policy.open()
    assert policy.can_retry(context)
    assert policy.can_retry(context)


def test_simple_retry_policy_exhausted_after_max_attempts() -> None:
    """Test that 2 failures leave one attempt and 3 failures exhaust a
    policy with max_attempts=3."""
    policy = SimpleRetryPolicy(max_attempts=3)
    context = policy.open()

    policy.register_failure(context, ValueError("1"))
    policy.register_failure(context, ValueError("2"))
    assert policy.can_retry(context)

    policy.register_failure(context, ValueError("3"))
    assert not policy.can_retry(context)
    assert context.retry_count == 3


@pytest.mark.parametrize("max_attempts", [1, 2, 5])
def test_simple_retry_policy_max_attempts(max_attempts: int) -> None:
    policy = SimpleRetryPolicy(max_attempts=max_attempts)
    context = policy.open()
    for _ in range(max_attempts - 1):
        policy.register_failure(context, ValueError())
    assert policy.can_retry(context)
    policy.register_failure(context, ValueError())
    assert not policy.can_retry(context)


def test_simple_retry_policy_non_retryable_kind() -> None:
    """Test that a failure outside the retryable kinds exhausts the policy
    regardless of the remaining budget."""
    policy = SimpleRetryPolicy(max_attempts=10, retryable=(ConnectionError, TimeoutError))
    context = policy.open()

    policy.register_failure(context, ConnectionResetError())
    assert policy.can_retry(context)

    policy.register_failure(context, KeyError("missing"))
    assert not policy.can_retry(context)


def test_simple_retry_policy_single_retryable_class() -> None:
    policy = SimpleRetryPolicy(retryable=TimeoutError)
    context = policy.open()
    policy.register_failure(context, TimeoutError())
    assert policy.can_retry(context)


def test_simple_retry_policy_retryable_mapping() -> None:
    policy = SimpleRetryPolicy(max_attempts=5, retryable={OSError: True, PermissionError: False})
    context = policy.open()

    policy.register_failure(context, ConnectionError())
    assert policy.can_retry(context)

    policy.register_failure(context, PermissionError())
    assert not policy.can_retry(context)


def test_simple_retry_policy_retryable_predicate() -> None:
    policy = SimpleRetryPolicy(retryable=lambda exc: "transient" in str(exc))
    context = policy.open()

    policy.register_failure(context, RuntimeError("transient glitch"))
    assert policy.can_retry(context)

    policy.register_failure(context, RuntimeError("fatal"))
    assert not policy.can_retry(context)


@pytest.mark.parametrize("retryable", [None, (), [], {}])
def test_simple_retry_policy_empty_retryable_is_wildcard(retryable: object) -> None:
    policy = SimpleRetryPolicy(retryable=retryable)
    context = policy.open()
    policy.register_failure(context, LookupError())
    assert policy.can_retry(context)


def test_simple_retry_policy_exhausted_only() -> None:
    policy = SimpleRetryPolicy()
    context = policy.open()
    context.set_exhausted_only()
    assert not policy.can_retry(context)


@pytest.mark.parametrize("max_attempts", [0, -1])
def test_simple_retry_policy_invalid_max_attempts(max_attempts: int) -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1"):
        SimpleRetryPolicy(max_attempts=max_attempts)


def test_simple_retry_policy_shared_between_contexts() -> None:
    policy = SimpleRetryPolicy(max_attempts=2)
    context1 = policy.open()
    context2 = policy.open()

    policy.register_failure(context1, ValueError())
    policy.register_failure(context1, ValueError())

    assert not policy.can_retry(context1)
    assert policy.can_retry(context2)


def test_simple_retry_policy_repr() -> None:
    assert repr(SimpleRetryPolicy(max_attempts=4)).startswith(
        "SimpleRetryPolicy(max_attempts=4, classifier=ExceptionClassifier("
    )
