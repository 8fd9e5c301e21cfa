r"""Utility functions for the retry loop: response inspection, timer and
structured logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "get_status_code",
    "log_structured",
    "set_correlation_id",
    "sleep_ms",
]

from aresfetch.utils.response import get_status_code
from aresfetch.utils.sleep import sleep_ms
from aresfetch.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
