r"""aresfetch - Retry logic for any async request function.

This package wraps an asynchronous request function (for example
``httpx.AsyncClient.get``) with configurable retry behavior: a maximum
number of retries, a delay strategy between attempts and a predicate
deciding whether an outcome is worth another attempt.

Key Features:
    - Works with any ``async (target, *args, **options)`` function
    - Per-call ``retries``, ``retry_delay`` and ``retry_on`` keyword
      arguments, never forwarded to the wrapped function
    - Constant delays or delays computed from each attempt outcome
    - Retry on a set of status codes or on any predicate
    - Original exceptions re-raised unchanged once retries are exhausted

Example:
    ```pycon
    >>> import httpx
    >>> from aresfetch import fetch_builder
    >>> client = httpx.AsyncClient()  # doctest: +SKIP
    >>> fetch_retry = fetch_builder(client.get)  # doctest: +SKIP
    >>> response = await fetch_retry(
    ...     "https://api.example.com/data",
    ...     retries=3,
    ...     retry_delay=lambda attempt, error, response: 2**attempt * 1000,
    ...     retry_on=[503, 504],
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "RETRY_STATUS_CODES",
    "AresfetchError",
    "ArgumentError",
    "RetryInfo",
    "RetryOptions",
    "RetryingFetch",
    "__version__",
    "fetch_builder",
]

from importlib.metadata import PackageNotFoundError, version

from aresfetch.builder import RetryingFetch, fetch_builder
from aresfetch.callbacks import RetryInfo
from aresfetch.core.config import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY,
    RETRY_STATUS_CODES,
    RetryOptions,
)
from aresfetch.exceptions import AresfetchError, ArgumentError

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
