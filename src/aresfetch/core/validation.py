r"""Parameter validation utilities for the retry options.

Every validator raises ``ArgumentError`` with a fixed message when the
value is invalid and returns ``None`` otherwise. ``None`` is never a
valid retry option: an option that is not wanted must be omitted.
"""

from __future__ import annotations

__all__ = [
    "RETRY_OPTION_KEYS",
    "is_non_negative_int",
    "split_retry_options",
    "validate_fetch",
    "validate_on_retry",
    "validate_retries",
    "validate_retry_delay",
    "validate_retry_on",
]

from typing import Any

from aresfetch.exceptions import ArgumentError

# Keyword arguments consumed by the retry logic, never forwarded
RETRY_OPTION_KEYS = ("retries", "retry_delay", "retry_on")
_STATUS_COLLECTION_TYPES = (list, tuple, set, frozenset)


def is_non_negative_int(value: Any) -> bool:
    """Indicate if a value is a non-negative integer.

    ``bool`` values are rejected even though ``bool`` subclasses ``int``.

    Args:
        value: The value to check.

    Returns:
        ``True`` if the value is an ``int`` greater than or equal to 0.

    Example:
        ```pycon
        >>> from aresfetch.core.validation import is_non_negative_int
        >>> is_non_negative_int(0)
        True
        >>> is_non_negative_int("1")
        False
        >>> is_non_negative_int(True)
        False

        ```
    """
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_fetch(fetch: Any) -> None:
    """Validate the request function to wrap.

    Args:
        fetch: The request function.

    Raises:
        ArgumentError: If ``fetch`` is not callable.
    """
    if not callable(fetch):
        msg = "fetch must be a function"
        raise ArgumentError(msg)


def validate_retries(retries: Any) -> None:
    """Validate the maximum number of retries.

    Args:
        retries: The maximum number of retries. Must be an ``int`` >= 0.

    Raises:
        ArgumentError: If ``retries`` is not a non-negative integer.

    Example:
        ```pycon
        >>> from aresfetch.core.validation import validate_retries
        >>> validate_retries(0)
        >>> validate_retries(3)
        >>> validate_retries(-1)
        Traceback (most recent call last):
        ...
        aresfetch.exceptions.ArgumentError: retries must be a positive integer

        ```
    """
    if not is_non_negative_int(retries):
        msg = "retries must be a positive integer"
        raise ArgumentError(msg)


def validate_retry_delay(retry_delay: Any) -> None:
    """Validate the delay strategy.

    Args:
        retry_delay: A non-negative number of milliseconds, or a function
            returning one.

    Raises:
        ArgumentError: If ``retry_delay`` is neither a non-negative
            integer nor callable.
    """
    if not (callable(retry_delay) or is_non_negative_int(retry_delay)):
        msg = "retry_delay must be a positive integer or a function returning a positive integer"
        raise ArgumentError(msg)


def validate_retry_on(retry_on: Any) -> None:
    """Validate the retry predicate.

    Args:
        retry_on: A list, tuple, set or frozenset of HTTP status codes, or
            a predicate function.

    Raises:
        ArgumentError: If ``retry_on`` is neither a collection of
            integer status codes nor callable.

    Example:
        ```pycon
        >>> from aresfetch.core.validation import validate_retry_on
        >>> validate_retry_on([503, 504])
        >>> validate_retry_on(lambda attempt, error, response: error is not None)
        >>> validate_retry_on(503)
        Traceback (most recent call last):
        ...
        aresfetch.exceptions.ArgumentError: retry_on property expects an array or function

        ```
    """
    if callable(retry_on):
        return
    if not (
        isinstance(retry_on, _STATUS_COLLECTION_TYPES)
        and all(is_non_negative_int(code) for code in retry_on)
    ):
        msg = "retry_on property expects an array or function"
        raise ArgumentError(msg)


def validate_on_retry(on_retry: Any) -> None:
    """Validate the optional ``on_retry`` callback.

    Args:
        on_retry: ``None`` or a callable.

    Raises:
        ArgumentError: If ``on_retry`` is set and not callable.
    """
    if on_retry is not None and not callable(on_retry):
        msg = "on_retry must be a function"
        raise ArgumentError(msg)


def split_retry_options(options: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split call options into retry options and forwarded options.

    Every retry option present in ``options`` is validated, including
    the ones explicitly set to ``None``. The input is not modified.

    Args:
        options: The keyword arguments of one call.

    Returns:
        A tuple ``(retry_options, forwarded_options)``.

    Raises:
        ArgumentError: If a retry option is invalid.

    Example:
        ```pycon
        >>> from aresfetch.core.validation import split_retry_options
        >>> split_retry_options({"retries": 2, "timeout": 5.0})
        ({'retries': 2}, {'timeout': 5.0})

        ```
    """
    retry_options = {key: value for key, value in options.items() if key in RETRY_OPTION_KEYS}
    forwarded = {key: value for key, value in options.items() if key not in RETRY_OPTION_KEYS}
    if "retries" in retry_options:
        validate_retries(retry_options["retries"])
    if "retry_delay" in retry_options:
        validate_retry_delay(retry_options["retry_delay"])
    if "retry_on" in retry_options:
        validate_retry_on(retry_options["retry_on"])
    return retry_options, forwarded
