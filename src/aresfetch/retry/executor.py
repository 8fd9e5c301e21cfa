r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs the attempt
loop of one call: execute the request, evaluate its outcome, then either
settle or wait and try again.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import inspect
import logging
from typing import TYPE_CHECKING, Any

from aresfetch.callbacks import invoke_on_retry
from aresfetch.delay.strategy import build_delay_strategy
from aresfetch.exceptions import ArgumentError
from aresfetch.retry.decider import build_retry_decider
from aresfetch.utils.response import get_status_code
from aresfetch.utils.sleep import sleep_ms
from aresfetch.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresfetch.core.config import RetryOptions
    from aresfetch.delay.base import BaseDelayStrategy
    from aresfetch.retry.decider import BaseRetryDecider

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an async request function with automatic retry logic.

    The executor is built from a validated ``RetryOptions`` and resolves
    its ``retry_delay`` and ``retry_on`` options once, into a delay
    strategy and a retry decider. Attempts are strictly sequential: the
    next attempt starts only after the outcome of the previous one has
    been evaluated and its delay has elapsed.

    Attributes:
        config: The retry configuration.
        strategy: Strategy computing the delay before each retry.
        decider: Logic deciding whether an outcome is retried.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresfetch.core.config import RetryOptions
        >>> from aresfetch.retry import AsyncRetryExecutor
        >>> async def fetch(url):
        ...     return {"status": 200, "url": url}
        ...
        >>> executor = AsyncRetryExecutor(RetryOptions(retries=2, retry_delay=10))
        >>> asyncio.run(executor.execute(fetch, "https://api.example.com"))
        {'status': 200, 'url': 'https://api.example.com'}

        ```
    """

    def __init__(self, config: RetryOptions) -> None:
        self.config = config
        self.strategy: BaseDelayStrategy = build_delay_strategy(config.retry_delay)
        self.decider: BaseRetryDecider = build_retry_decider(config.retry_on)

    async def execute(
        self,
        fetch: Callable[..., Awaitable[Any]],
        target: Any,
        /,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Execute the request function with automatic retry logic.

        The request function is called up to ``retries + 1`` times. After
        each attempt the retry decider is consulted:

        - if it declines, the response is returned or the exception is
          re-raised
        - if it accepts but no retry is left, the outcome is settled the
          same way: a response is still returned, an exception is still
          re-raised
        - otherwise the delay strategy is consulted and the next attempt
          starts once the delay has elapsed

        Any ``Exception`` raised while awaiting the request is an attempt
        failure. A request function that does not return an awaitable is
        a programming error and is never retried. Exceptions raised by the
        ``retry_on``, ``retry_delay`` or ``on_retry`` callables are not
        caught.

        Args:
            fetch: The async request function.
            target: The first argument of the request function, forwarded
                verbatim.
            *args: Extra positional arguments forwarded verbatim.
            **kwargs: Keyword arguments forwarded verbatim.

        Returns:
            The response of the last attempt.

        Raises:
            ArgumentError: If the request function does not return an
                awaitable.
            Exception: The exception of the last attempt, unchanged.
        """
        retries = self.config.retries
        attempt = 0
        while True:
            error: Exception | None = None
            response: Any = None
            logger.debug(f"Request to {target!r} (attempt {attempt + 1}/{retries + 1})")
            result = fetch(target, *args, **kwargs)
            if not inspect.isawaitable(result):
                msg = f"fetch must return an awaitable, got {type(result).__qualname__}"
                raise ArgumentError(msg)
            try:
                response = await result
            except Exception as exc:  # noqa: BLE001
                error = exc

            should_retry = self.decider.should_retry(attempt, error, response)
            if not should_retry or attempt >= retries:
                if should_retry:
                    self._log_exhausted(target, attempt, error, response)
                if error is not None:
                    raise error
                return response

            delay = self.strategy.calculate(attempt, error, response)
            log_structured(
                logger,
                logging.DEBUG,
                f"Retrying request to {target!r} in {delay}ms",
                attempt=attempt,
                retries=retries,
                delay_ms=delay,
                status_code=get_status_code(response) if error is None else None,
                error_type=type(error).__name__ if error is not None else None,
            )
            invoke_on_retry(
                self.config.on_retry,
                target=target,
                attempt=attempt,
                retries=retries,
                delay=delay,
                error=error,
                response=response,
            )
            await sleep_ms(delay)
            attempt += 1

    def _log_exhausted(
        self, target: Any, attempt: int, error: Exception | None, response: Any
    ) -> None:
        log_structured(
            logger,
            logging.DEBUG,
            f"Request to {target!r} exhausted {self.config.retries} retries",
            attempt=attempt,
            retries=self.config.retries,
            status_code=get_status_code(response) if error is None else None,
            error_type=type(error).__name__ if error is not None else None,
        )
