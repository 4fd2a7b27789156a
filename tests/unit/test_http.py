r"""Unit tests for the httpx integration."""

from __future__ import annotations

from unittest.mock import Mock, call

import httpx
import pytest

from retrykit import RetryError, RetryTemplate
from retrykit.backoff import BackOffPolicy, FixedBackOffPolicy, Sleeper
from retrykit.context import RetryContext
from retrykit.http import (
    RETRY_STATUS_CODES,
    RetryAfterBackOffPolicy,
    http_retry_policy,
    is_transient_http_error,
)

TEST_URL = "https://api.example.com/data"


def make_status_error(status_code: int, headers: dict[str, str] | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", TEST_URL)
    response = httpx.Response(status_code, headers=headers, request=request)
    return httpx.HTTPStatusError(
        f"status {status_code}", request=request, response=response
    )


#############################################
#     Tests for is_transient_http_error     #
#############################################


@pytest.mark.parametrize(
    "failure",
    [
        httpx.ConnectError("refused"),
        httpx.ReadTimeout("timed out"),
        httpx.RemoteProtocolError("bad"),
        httpx.NetworkError("unreachable"),
    ],
)
def test_is_transient_http_error_transport(failure: Exception) -> None:
    assert is_transient_http_error(failure)


@pytest.mark.parametrize("status_code", RETRY_STATUS_CODES)
def test_is_transient_http_error_retryable_status(status_code: int) -> None:
    assert is_transient_http_error(make_status_error(status_code))


@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 422])
def test_is_transient_http_error_permanent_status(status_code: int) -> None:
    assert not is_transient_http_error(make_status_error(status_code))


def test_is_transient_http_error_custom_forcelist() -> None:
    assert is_transient_http_error(make_status_error(409), status_forcelist=(409,))
    assert not is_transient_http_error(make_status_error(503), status_forcelist=(409,))


def test_is_transient_http_error_other_exception() -> None:
    assert not is_transient_http_error(ValueError("boom"))


#######################################
#     Tests for http_retry_policy     #
#######################################


def test_http_retry_policy() -> None:
    policy = http_retry_policy(max_attempts=4)
    context = policy.open()

    policy.register_failure(context, make_status_error(503))
    assert policy.can_retry(context)
    policy.register_failure(context, make_status_error(404))
    assert not policy.can_retry(context)


def test_http_retry_policy_with_template(mock_sleep: Mock) -> None:
    request = httpx.Request("GET", TEST_URL)
    responses = [
        httpx.Response(503, request=request),
        httpx.Response(500, request=request),
        httpx.Response(200, json={"key": "value"}, request=request),
    ]
    client = Mock(spec=httpx.Client)
    client.get.side_effect = responses

    def fetch(context: RetryContext) -> dict:  # noqa: ARG001
        response = client.get(TEST_URL)
        response.raise_for_status()
        return response.json()

    template = RetryTemplate(
        retry_policy=http_retry_policy(max_attempts=3),
        backoff_policy=FixedBackOffPolicy(period=0.3),
    )

    assert template.execute(fetch) == {"key": "value"}
    assert client.get.call_count == 3
    assert mock_sleep.call_args_list == [call(0.3), call(0.3)]


def test_http_retry_policy_permanent_status_with_template() -> None:
    error = make_status_error(404)
    template = RetryTemplate(retry_policy=http_retry_policy(max_attempts=5))
    callback = Mock(side_effect=error)

    with pytest.raises(RetryError) as exc_info:
        template.execute(callback)

    assert exc_info.value.cause is error
    callback.assert_called_once()


##############################################
#     Tests for RetryAfterBackOffPolicy     #
##############################################


def test_retry_after_backoff_policy_uses_header() -> None:
    sleeper = Mock(spec=Sleeper)
    delegate = Mock(spec=BackOffPolicy)
    policy = RetryAfterBackOffPolicy(delegate=delegate, sleeper=sleeper)
    context = RetryContext()
    policy.start(context)
    context.record_failure(make_status_error(429, headers={"Retry-After": "7"}))

    policy.back_off(context)

    sleeper.sleep.assert_called_once_with(7.0)
    delegate.start.assert_called_once_with(context)
    delegate.back_off.assert_not_called()


def test_retry_after_backoff_policy_capped() -> None:
    sleeper = Mock(spec=Sleeper)
    policy = RetryAfterBackOffPolicy(max_wait_time=2.0, sleeper=sleeper)
    context = RetryContext()
    context.record_failure(make_status_error(503, headers={"Retry-After": "120"}))

    policy.back_off(context)

    sleeper.sleep.assert_called_once_with(2.0)


@pytest.mark.parametrize(
    "failure",
    [
        make_status_error(503),
        make_status_error(503, headers={"Retry-After": "later"}),
        httpx.ConnectError("refused"),
    ],
)
def test_retry_after_backoff_policy_delegates(failure: Exception) -> None:
    sleeper = Mock(spec=Sleeper)
    delegate = Mock(spec=BackOffPolicy)
    policy = RetryAfterBackOffPolicy(delegate=delegate, sleeper=sleeper)
    context = RetryContext()
    context.record_failure(failure)

    policy.back_off(context)

    delegate.back_off.assert_called_once_with(context)
    sleeper.sleep.assert_not_called()


def test_retry_after_backoff_policy_default_delegate(mock_sleep: Mock) -> None:
    policy = RetryAfterBackOffPolicy()
    context = RetryContext()
    policy.start(context)
    context.record_failure(httpx.ConnectError("refused"))

    policy.back_off(context)
    policy.back_off(context)

    assert mock_sleep.call_args_list == [call(0.1), call(0.2)]


def test_retry_after_backoff_policy_invalid_max_wait_time() -> None:
    with pytest.raises(ValueError, match=r"max_wait_time must be > 0"):
        RetryAfterBackOffPolicy(max_wait_time=0)


@pytest.mark.parametrize("retry_after", ["inf", "1e999", "nan"])
def test_retry_after_backoff_policy_non_finite_header_delegates(
    mock_sleep: Mock, retry_after: str
) -> None:
    template = RetryTemplate(
        retry_policy=http_retry_policy(max_attempts=3),
        backoff_policy=RetryAfterBackOffPolicy(),
    )
    callback = Mock(
        side_effect=[make_status_error(503, headers={"Retry-After": retry_after}), "ok"]
    )

    assert template.execute(callback) == "ok"
    assert callback.call_count == 2
    assert mock_sleep.call_args_list == [call(0.1)]
