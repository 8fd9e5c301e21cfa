r"""Configuration dataclass and defaults for retrying fetch functions.

This module provides configuration constants and a dataclass-based
configuration object shared by ``fetch_builder`` (builder-level
defaults) and by each call of the returned function (per-call
overrides).
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "RETRY_OPTION_KEYS",
    "RETRY_STATUS_CODES",
    "RetryOptions",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aresfetch.core.validation import (
    RETRY_OPTION_KEYS,
    validate_on_retry,
    validate_retries,
    validate_retry_delay,
    validate_retry_on,
)
from aresfetch.retry.decider import retry_on_network_error

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

    from aresfetch.callbacks import RetryInfo


# Default maximum number of retry attempts
# Total attempts = retries + 1 (initial attempt)
DEFAULT_RETRIES = 3

# Default delay between two attempts, in milliseconds
DEFAULT_RETRY_DELAY = 1000

# HTTP status codes commonly worth retrying, usable as ``retry_on``
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass(frozen=True)
class RetryOptions:
    """Configuration for the retry behavior of a fetch function.

    The record is immutable and validated on creation, so an invalid
    configuration can never reach the retry loop.

    Args:
        retries: Maximum number of retries after the first attempt.
            Must be a non-negative integer.
        retry_delay: Delay before each retry, either a constant number of
            milliseconds or a function ``(attempt, error, response)``
            returning milliseconds.
        retry_on: Either a collection of HTTP status codes that trigger a
            retry, or a predicate ``(attempt, error, response) -> bool``.
            The default retries on exceptions only.
        on_retry: Optional callback invoked right before waiting for
            each retry. Receives a ``RetryInfo``.

    Example:
        ```pycon
        >>> from aresfetch.core.config import RetryOptions
        >>> options = RetryOptions()
        >>> options.retries
        3
        >>> options.retry_delay
        1000
        >>> merged = options.merge(retries=5, retry_on=[503])
        >>> merged.retries
        5
        >>> options.retries  # Original unchanged
        3

        ```
    """

    retries: int = DEFAULT_RETRIES
    retry_delay: int | Callable[[int, Exception | None, Any], float] = DEFAULT_RETRY_DELAY
    retry_on: Collection[int] | Callable[[int, Exception | None, Any], bool] = (
        retry_on_network_error
    )
    on_retry: Callable[[RetryInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ArgumentError: If any parameter fails validation.
        """
        validate_retries(self.retries)
        validate_retry_delay(self.retry_delay)
        validate_retry_on(self.retry_on)
        validate_on_retry(self.on_retry)

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create a new configuration with the given fields overridden.

        Unlike a plain ``dataclasses.replace``, ``None`` is not treated as
        "keep the current value": it is validated like any other value
        and rejected for the retry fields.

        Args:
            **overrides: Fields to override.

        Returns:
            A new validated ``RetryOptions`` instance.

        Raises:
            ArgumentError: If an override is invalid.
        """
        if not overrides:
            return self
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Dictionary with the configuration fields.

        Example:
            ```pycon
            >>> from aresfetch.core.config import RetryOptions
            >>> RetryOptions(retries=5).to_dict()["retries"]
            5

            ```
        """
        return {
            "retries": self.retries,
            "retry_delay": self.retry_delay,
            "retry_on": self.retry_on,
            "on_retry": self.on_retry,
        }
