r"""Factory wrapping an async request function with retry logic."""

from __future__ import annotations

__all__ = ["RetryingFetch", "fetch_builder"]

import logging
from typing import TYPE_CHECKING, Any

from aresfetch.core.config import RetryOptions
from aresfetch.core.validation import split_retry_options, validate_fetch
from aresfetch.exceptions import ArgumentError
from aresfetch.retry.executor import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

logger: logging.Logger = logging.getLogger(__name__)


class RetryingFetch:
    """Retry-enabled version of an async request function.

    Calling an instance has the same contract as calling the wrapped
    function, plus three optional keyword arguments: ``retries``,
    ``retry_delay`` and ``retry_on``. They override the builder-level
    ``RetryOptions`` for this call only and are never forwarded to the
    wrapped function. All other arguments are forwarded unchanged.

    The call validates the retry options synchronously and raises
    ``ArgumentError`` before any request is made. It returns a coroutine
    that runs the attempt loop when awaited.

    Args:
        fetch: The async request function to wrap.
        config: The builder-level retry configuration.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresfetch import fetch_builder
        >>> async def fetch(url, **options):
        ...     return {"status": 200, "options": options}
        ...
        >>> fetch_retry = fetch_builder(fetch)
        >>> asyncio.run(fetch_retry("https://api.example.com", retries=5, timeout=2.0))
        {'status': 200, 'options': {'timeout': 2.0}}
        >>> asyncio.run(fetch_retry("https://api.example.com"))
        {'status': 200, 'options': {}}

        ```
    """

    def __init__(self, fetch: Callable[..., Awaitable[Any]], config: RetryOptions) -> None:
        self.fetch = fetch
        self.config = config

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(fetch={self.fetch!r}, config={self.config!r})"

    def __call__(self, target: Any, /, *args: Any, **options: Any) -> Coroutine[Any, Any, Any]:
        """Start a retry-enabled request.

        Args:
            target: The first argument of the wrapped function (e.g. a
                URL), forwarded verbatim.
            *args: Extra positional arguments, forwarded verbatim.
            **options: Retry options and forwarded keyword arguments.

        Returns:
            A coroutine resolving to the response of the last attempt.

        Raises:
            ArgumentError: If a retry option is invalid.
        """
        overrides, forwarded = split_retry_options(options)
        config = self.config.merge(**overrides)
        executor = AsyncRetryExecutor(config)
        return executor.execute(self.fetch, target, *args, **forwarded)


def fetch_builder(
    fetch: Callable[..., Awaitable[Any]], config: RetryOptions | None = None
) -> RetryingFetch:
    """Wrap an async request function with automatic retry logic.

    Args:
        fetch: The async request function to wrap, called as
            ``await fetch(target, *args, **options)``. For example
            ``httpx.AsyncClient().get``.
        config: Optional builder-level retry configuration. Defaults to
            ``RetryOptions()``: 3 retries, 1000ms apart, on exceptions
            only.

    Returns:
        The retry-enabled request function.

    Raises:
        ArgumentError: If ``fetch`` is not callable or ``config`` is not
            a ``RetryOptions``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresfetch import RetryOptions, fetch_builder
        >>> client = httpx.AsyncClient()  # doctest: +SKIP
        >>> fetch_retry = fetch_builder(
        ...     client.get,
        ...     RetryOptions(retries=5, retry_delay=200),
        ... )  # doctest: +SKIP
        >>> response = await fetch_retry(
        ...     "https://api.example.com/data", retry_on=[503]
        ... )  # doctest: +SKIP

        ```
    """
    validate_fetch(fetch)
    if config is None:
        config = RetryOptions()
    elif not isinstance(config, RetryOptions):
        msg = "config must be a RetryOptions instance"
        raise ArgumentError(msg)
    logger.debug(f"Building retrying fetch for {fetch!r} with {config}")
    return RetryingFetch(fetch, config)
