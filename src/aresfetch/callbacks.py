r"""Callback types for observing the retry loop.

A single hook is available, ``on_retry``, configured on the
``RetryOptions`` given to ``fetch_builder``. It is called after a retry
has been decided and its delay computed, right before waiting.

Example:
    ```pycon
    >>> from aresfetch import RetryOptions, fetch_builder
    >>> from aresfetch.callbacks import RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"retry {info.attempt + 1}/{info.retries} in {info.delay}ms")
    ...
    >>> async def fetch(url):
    ...     ...
    ...
    >>> fetch_retry = fetch_builder(fetch, RetryOptions(on_retry=log_retry))

    ```
"""

from __future__ import annotations

__all__ = ["RetryInfo", "invoke_on_retry"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to the ``on_retry`` callback.

    Attributes:
        target: The target given to the fetch function.
        attempt: The index of the attempt that just completed (0-indexed).
        retries: Maximum number of retries configured.
        delay: The delay in milliseconds before the next attempt.
        error: The exception raised by the attempt, if any.
        response: The response returned by the attempt, if any.
    """

    target: Any
    attempt: int
    retries: int
    delay: float
    error: Exception | None
    response: Any


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    target: Any,
    attempt: int,
    retries: int,
    delay: float,
    error: Exception | None,
    response: Any,
) -> None:
    """Invoke the ``on_retry`` callback if one is configured.

    Exceptions raised by the callback propagate.
    """
    if on_retry is None:
        return
    on_retry(
        RetryInfo(
            target=target,
            attempt=attempt,
            retries=retries,
            delay=delay,
            error=error,
            response=response,
        )
    )
