r"""Configuration and validation shared by the builder and the retry
loop."""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "RETRY_OPTION_KEYS",
    "RETRY_STATUS_CODES",
    "RetryOptions",
    "split_retry_options",
    "validate_fetch",
    "validate_retries",
    "validate_retry_delay",
    "validate_retry_on",
]

from aresfetch.core.config import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY,
    RETRY_OPTION_KEYS,
    RETRY_STATUS_CODES,
    RetryOptions,
)
from aresfetch.core.validation import (
    split_retry_options,
    validate_fetch,
    validate_retries,
    validate_retry_delay,
    validate_retry_on,
)
