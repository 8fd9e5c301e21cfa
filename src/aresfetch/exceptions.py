r"""Exceptions raised by aresfetch.

Only configuration problems are reported with aresfetch exceptions.
Errors raised by the wrapped request function are never wrapped: once
the retry policy gives up, the original exception is re-raised as is.
"""

from __future__ import annotations

__all__ = ["AresfetchError", "ArgumentError"]


class AresfetchError(Exception):
    """Base class for all exceptions raised by aresfetch."""


class ArgumentError(AresfetchError, ValueError):
    """Raised when a retry option or the wrapped request function is
    invalid.

    These are programmer errors: they are raised synchronously, before
    any request is issued, and are never retried.

    Example:
        ```pycon
        >>> from aresfetch import ArgumentError, fetch_builder
        >>> fetch_builder("not a function")
        Traceback (most recent call last):
        ...
        aresfetch.exceptions.ArgumentError: fetch must be a function

        ```
    """
