r"""Unit tests for the asynchronous retry executor."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, Mock, call

import httpx
import pytest

from aresfetch.core.config import RetryOptions
from aresfetch.delay import ConstantDelay, FunctionDelay
from aresfetch.exceptions import ArgumentError
from aresfetch.retry import AsyncRetryExecutor, FunctionDecider, StatusCodeDecider

URL = "http://some-url.com"


def ok(status: int = 200) -> Mock:
    return Mock(spec=httpx.Response, status_code=status)


def test_async_retry_executor_creation() -> None:
    config = RetryOptions(retries=3, retry_delay=500, retry_on=[503])
    executor = AsyncRetryExecutor(config)

    assert executor.config is config
    assert isinstance(executor.strategy, ConstantDelay)
    assert executor.strategy.delay == 500
    assert isinstance(executor.decider, StatusCodeDecider)


def test_async_retry_executor_creation_default() -> None:
    executor = AsyncRetryExecutor(RetryOptions())
    assert isinstance(executor.strategy, ConstantDelay)
    assert executor.strategy.delay == 1000
    assert isinstance(executor.decider, FunctionDecider)


def test_async_retry_executor_keeps_delay_strategy() -> None:
    strategy = FunctionDelay(Mock(return_value=100))
    assert AsyncRetryExecutor(RetryOptions(retry_delay=strategy)).strategy is strategy


##########################################
#     Tests for the number of attempts    #
##########################################


@pytest.mark.asyncio
async def test_execute_first_call_success(mock_asleep: Mock) -> None:
    response = ok()
    fetch = AsyncMock(return_value=response)

    assert await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL) is response
    fetch.assert_called_once_with(URL)
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("retries", [0, 1, 2, 3, 5])
async def test_execute_all_attempts_fail(mock_asleep: Mock, retries: int) -> None:
    errors = [ConnectionError(f"error {i}") for i in range(retries + 1)]
    fetch = AsyncMock(side_effect=errors)

    with pytest.raises(ConnectionError) as exc_info:
        await AsyncRetryExecutor(RetryOptions(retries=retries)).execute(fetch, URL)

    assert exc_info.value is errors[-1]
    assert fetch.call_count == retries + 1
    assert mock_asleep.call_count == retries


@pytest.mark.asyncio
@pytest.mark.parametrize(("retries", "k"), [(0, 0), (1, 1), (3, 0), (3, 2), (3, 3), (5, 4)])
async def test_execute_attempt_k_succeeds(mock_asleep: Mock, retries: int, k: int) -> None:
    response = ok()
    fetch = AsyncMock(side_effect=[ConnectionError("boom")] * k + [response])

    result = await AsyncRetryExecutor(RetryOptions(retries=retries)).execute(fetch, URL)

    assert result is response
    assert fetch.call_count == k + 1


@pytest.mark.asyncio
async def test_execute_default_retries_fourth_call_success(mock_asleep: Mock) -> None:
    response = {"status": 200}
    fetch = AsyncMock(
        side_effect=[ConnectionError("1"), ConnectionError("2"), ConnectionError("3"), response]
    )

    assert await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL) is response
    assert fetch.call_count == 4


@pytest.mark.asyncio
async def test_execute_default_retries_fourth_call_failure(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=ConnectionError("boom"))

    with pytest.raises(ConnectionError, match=r"boom"):
        await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL)
    assert fetch.call_count == 4


@pytest.mark.asyncio
async def test_execute_zero_retries_failure_no_timer(mock_asleep: Mock) -> None:
    error = TimeoutError("timed out")
    fetch = AsyncMock(side_effect=error)

    with pytest.raises(TimeoutError) as exc_info:
        await AsyncRetryExecutor(RetryOptions(retries=0)).execute(fetch, URL)

    assert exc_info.value is error
    fetch.assert_called_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_execute_default_predicate_does_not_retry_error_status(mock_asleep: Mock) -> None:
    response = ok(503)
    fetch = AsyncMock(return_value=response)

    assert await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL) is response
    fetch.assert_called_once()


@pytest.mark.asyncio
async def test_execute_does_not_catch_base_exceptions(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=asyncio.CancelledError)

    with pytest.raises(asyncio.CancelledError):
        await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL)
    fetch.assert_called_once()


@pytest.mark.asyncio
async def test_execute_sync_fetch_is_not_retried(mock_asleep: Mock) -> None:
    fetch = Mock(return_value={"status": 200})

    with pytest.raises(ArgumentError, match=r"fetch must return an awaitable, got dict"):
        await AsyncRetryExecutor(RetryOptions()).execute(fetch, URL)
    fetch.assert_called_once_with(URL)
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_execute_sync_fetch_is_not_retried_with_retry_on_function(
    mock_asleep: Mock,
) -> None:
    fetch = Mock(return_value=None)
    retry_on = Mock(return_value=True)

    with pytest.raises(ArgumentError, match=r"fetch must return an awaitable"):
        await AsyncRetryExecutor(RetryOptions(retry_on=retry_on)).execute(fetch, URL)
    fetch.assert_called_once()
    retry_on.assert_not_called()


@pytest.mark.asyncio
async def test_execute_forwards_arguments(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=[ConnectionError("boom"), ok()])

    await AsyncRetryExecutor(RetryOptions()).execute(fetch, "GET", URL, timeout=1.0)

    assert fetch.call_args_list == [call("GET", URL, timeout=1.0)] * 2


#################################
#     Tests for retry_delay     #
#################################


@pytest.mark.asyncio
async def test_execute_constant_delay(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=[ConnectionError("1"), ConnectionError("2"), ok()])

    await AsyncRetryExecutor(RetryOptions(retry_delay=5000)).execute(fetch, URL)

    assert mock_asleep.call_args_list == [call(5.0), call(5.0)]


@pytest.mark.asyncio
async def test_execute_zero_delay(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=[ConnectionError("boom"), ok()])

    await AsyncRetryExecutor(RetryOptions(retry_delay=0)).execute(fetch, URL)

    mock_asleep.assert_called_once_with(0.0)
    assert fetch.call_count == 2


@pytest.mark.asyncio
async def test_execute_delay_function_arguments(mock_asleep: Mock) -> None:
    first, second = ConnectionError("first error"), ConnectionError("second error")
    response = ok()
    fetch = AsyncMock(side_effect=[first, second, response])
    retry_delay = Mock(return_value=200)

    result = await AsyncRetryExecutor(RetryOptions(retry_delay=retry_delay)).execute(fetch, URL)

    assert result is response
    assert retry_delay.call_args_list == [call(0, first, None), call(1, second, None)]
    assert mock_asleep.call_args_list == [call(0.2), call(0.2)]


@pytest.mark.asyncio
async def test_execute_delay_function_receives_response(mock_asleep: Mock) -> None:
    retried, response = ok(503), ok(200)
    fetch = AsyncMock(side_effect=[retried, response])
    retry_delay = Mock(return_value=0)

    await AsyncRetryExecutor(RetryOptions(retry_delay=retry_delay, retry_on=[503])).execute(
        fetch, URL
    )

    retry_delay.assert_called_once_with(0, None, retried)


@pytest.mark.asyncio
async def test_execute_delay_strategy(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=[ConnectionError("1")] * 3 + [ok()])

    strategy = FunctionDelay(lambda attempt, error, response: 100 * 2**attempt)
    await AsyncRetryExecutor(RetryOptions(retry_delay=strategy)).execute(fetch, URL)

    assert mock_asleep.call_args_list == [call(0.1), call(0.2), call(0.4)]


@pytest.mark.asyncio
async def test_execute_delay_function_error_propagates(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=ConnectionError("boom"))
    retry_delay = Mock(side_effect=RuntimeError("bad delay"))

    with pytest.raises(RuntimeError, match=r"bad delay"):
        await AsyncRetryExecutor(RetryOptions(retry_delay=retry_delay)).execute(fetch, URL)
    fetch.assert_called_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_execute_delay_function_invalid_result(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=ConnectionError("boom"))

    with pytest.raises(ArgumentError, match=r"retry_delay function must return"):
        await AsyncRetryExecutor(
            RetryOptions(retry_delay=lambda attempt, error, response: -1)
        ).execute(fetch, URL)


@pytest.mark.asyncio
async def test_execute_delay_not_called_when_not_retrying(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=ConnectionError("boom"))
    retry_delay = Mock(return_value=0)

    with pytest.raises(ConnectionError):
        await AsyncRetryExecutor(RetryOptions(retries=0, retry_delay=retry_delay)).execute(
            fetch, URL
        )
    retry_delay.assert_not_called()


##############################
#     Tests for retry_on     #
##############################


@pytest.mark.asyncio
async def test_execute_retry_on_status_codes(mock_asleep: Mock) -> None:
    response = {"status": 200}
    fetch = AsyncMock(side_effect=[{"status": 503}, response])

    result = await AsyncRetryExecutor(
        RetryOptions(retry_delay=500, retry_on=[503, 404])
    ).execute(fetch, URL)

    assert result is response
    assert fetch.call_count == 2
    mock_asleep.assert_called_once_with(0.5)


@pytest.mark.asyncio
async def test_execute_retry_on_status_codes_never_retries_errors(mock_asleep: Mock) -> None:
    error = ConnectionError("boom")
    fetch = AsyncMock(side_effect=[error, ok()])

    with pytest.raises(ConnectionError) as exc_info:
        await AsyncRetryExecutor(RetryOptions(retry_on=[503])).execute(fetch, URL)

    assert exc_info.value is error
    fetch.assert_called_once()


@pytest.mark.asyncio
async def test_execute_retry_on_exhausted_returns_last_response(mock_asleep: Mock) -> None:
    responses = [ok(503), ok(503), ok(503)]
    fetch = AsyncMock(side_effect=responses)

    result = await AsyncRetryExecutor(RetryOptions(retries=2, retry_on=[503])).execute(fetch, URL)

    assert result is responses[-1]
    assert fetch.call_count == 3


@pytest.mark.asyncio
async def test_execute_retry_on_function_error_arguments(mock_asleep: Mock) -> None:
    first, second = ConnectionError("first"), ConnectionError("second")
    fetch = AsyncMock(side_effect=[first, second])
    retry_on = Mock(side_effect=[True, False])

    with pytest.raises(ConnectionError) as exc_info:
        await AsyncRetryExecutor(RetryOptions(retry_on=retry_on)).execute(fetch, URL)

    assert exc_info.value is second
    assert retry_on.call_args_list == [call(0, first, None), call(1, second, None)]
    for args, kwargs in retry_on.call_args_list:
        assert len(args) == 3
        assert kwargs == {}


@pytest.mark.asyncio
async def test_execute_retry_on_function_response_arguments(mock_asleep: Mock) -> None:
    first, second = {"status": 200}, {"status": 200}
    fetch = AsyncMock(side_effect=[first, second])
    retry_on = Mock(side_effect=[True, False])

    result = await AsyncRetryExecutor(RetryOptions(retry_on=retry_on)).execute(fetch, URL)

    assert result is second
    assert retry_on.call_args_list == [call(0, None, first), call(1, None, second)]
    assert fetch.call_count == 2


@pytest.mark.asyncio
async def test_execute_retry_on_function_false_on_error_status(mock_asleep: Mock) -> None:
    response = {"status": 502}
    fetch = AsyncMock(return_value=response)

    result = await AsyncRetryExecutor(
        RetryOptions(retry_on=lambda attempt, error, response: False)
    ).execute(fetch, URL)

    assert result is response
    fetch.assert_called_once()


@pytest.mark.asyncio
async def test_execute_retry_on_function_error_propagates(mock_asleep: Mock) -> None:
    fetch = AsyncMock(return_value=ok())
    retry_on = Mock(side_effect=RuntimeError("bad predicate"))

    with pytest.raises(RuntimeError, match=r"bad predicate"):
        await AsyncRetryExecutor(RetryOptions(retry_on=retry_on)).execute(fetch, URL)
    fetch.assert_called_once()


@pytest.mark.asyncio
async def test_execute_retry_on_called_once_per_attempt(mock_asleep: Mock) -> None:
    fetch = AsyncMock(side_effect=ConnectionError("boom"))
    retry_on = Mock(return_value=True)

    with pytest.raises(ConnectionError):
        await AsyncRetryExecutor(RetryOptions(retries=2, retry_on=retry_on)).execute(fetch, URL)

    assert [c.args[0] for c in retry_on.call_args_list] == [0, 1, 2]
    assert fetch.call_count == 3


##############################
#     Tests for on_retry     #
##############################


@pytest.mark.asyncio
async def test_execute_on_retry_called(mock_asleep: Mock, mock_callback: Mock) -> None:
    error = ConnectionError("boom")
    fetch = AsyncMock(side_effect=[error, ok()])

    await AsyncRetryExecutor(
        RetryOptions(retries=2, retry_delay=300, on_retry=mock_callback)
    ).execute(fetch, URL)

    mock_callback.assert_called_once()
    info = mock_callback.call_args.args[0]
    assert info.target == URL
    assert info.attempt == 0
    assert info.retries == 2
    assert info.delay == 300
    assert info.error is error
    assert info.response is None


@pytest.mark.asyncio
async def test_execute_on_retry_not_called_without_retry(
    mock_asleep: Mock, mock_callback: Mock
) -> None:
    fetch = AsyncMock(return_value=ok())
    await AsyncRetryExecutor(RetryOptions(on_retry=mock_callback)).execute(fetch, URL)
    mock_callback.assert_not_called()


#############################
#     Tests for logging     #
#############################


@pytest.mark.asyncio
async def test_execute_logs_retry(mock_asleep: Mock, caplog: pytest.LogCaptureFixture) -> None:
    fetch = AsyncMock(side_effect=[ConnectionError("boom"), ok()])

    with caplog.at_level(logging.DEBUG, logger="aresfetch"):
        await AsyncRetryExecutor(RetryOptions(retry_delay=10)).execute(fetch, URL)

    records = [r for r in caplog.records if r.getMessage().startswith("Retrying request")]
    assert len(records) == 1
    assert records[0].attempt == 0
    assert records[0].delay_ms == 10
    assert records[0].error_type == "ConnectionError"
    assert records[0].status_code is None


@pytest.mark.asyncio
async def test_execute_logs_exhausted(
    mock_asleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    fetch = AsyncMock(return_value=ok(503))

    with caplog.at_level(logging.DEBUG, logger="aresfetch"):
        await AsyncRetryExecutor(RetryOptions(retries=1, retry_on=[503])).execute(fetch, URL)

    records = [r for r in caplog.records if "exhausted" in r.getMessage()]
    assert len(records) == 1
    assert records[0].status_code == 503
