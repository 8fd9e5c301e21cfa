r"""Retry decision logic for determining whether to retry an attempt.

This module provides the deciders behind the ``retry_on`` option. A
decider looks at the outcome of one attempt (an exception or a
response, never both) and returns whether another attempt should be
made. The maximum number of retries is enforced by the executor, not by
the deciders.
"""

from __future__ import annotations

__all__ = [
    "BaseRetryDecider",
    "FunctionDecider",
    "StatusCodeDecider",
    "build_retry_decider",
    "retry_on_network_error",
]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from aresfetch.utils.response import get_status_code

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger: logging.Logger = logging.getLogger(__name__)


def retry_on_network_error(
    attempt: int,  # noqa: ARG001
    error: Exception | None,
    response: Any,  # noqa: ARG001
) -> bool:
    """Default ``retry_on`` predicate: retry on exceptions only.

    A received response is never retried, whatever its status code.

    Example:
        ```pycon
        >>> from aresfetch.retry import retry_on_network_error
        >>> retry_on_network_error(0, ConnectionError("reset"), None)
        True
        >>> retry_on_network_error(0, None, {"status": 503})
        False

        ```
    """
    return error is not None


class BaseRetryDecider(ABC):
    """Decides whether the outcome of an attempt should be retried."""

    @abstractmethod
    def should_retry(self, attempt: int, error: Exception | None, response: Any) -> bool:
        """Determine if the outcome of an attempt should trigger a retry.

        Args:
            attempt: The index of the attempt (0-indexed).
            error: The exception raised by the attempt, or ``None``.
            response: The response returned by the attempt, or ``None``.

        Returns:
            ``True`` if another attempt should be made.
        """


class StatusCodeDecider(BaseRetryDecider):
    """Retry responses whose status code is in a given set.

    Exceptions are never retried: without a response there is no status
    code to match.

    Args:
        status_codes: The HTTP status codes that trigger a retry.

    Example:
        ```pycon
        >>> from aresfetch.retry import StatusCodeDecider
        >>> decider = StatusCodeDecider([503, 404])
        >>> decider.should_retry(0, None, {"status": 503})
        True
        >>> decider.should_retry(0, None, {"status": 200})
        False
        >>> decider.should_retry(0, ConnectionError("reset"), None)
        False

        ```
    """

    def __init__(self, status_codes: Iterable[int]) -> None:
        self.status_codes = frozenset(status_codes)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_codes={sorted(self.status_codes)})"

    def should_retry(self, attempt: int, error: Exception | None, response: Any) -> bool:
        if error is not None:
            logger.debug(
                f"Attempt {attempt} raised {type(error).__name__}, "
                "status code retry policy does not apply"
            )
            return False
        status_code = get_status_code(response)
        return status_code in self.status_codes


class FunctionDecider(BaseRetryDecider):
    """Delegate the decision to a ``retry_on`` function.

    The function is always called with three positional arguments:
    ``(attempt, error, None)`` for an exception and
    ``(attempt, None, response)`` for a response. Exceptions raised by the
    function propagate to the caller unchanged.

    Args:
        func: The predicate function.
    """

    def __init__(self, func: Callable[[int, Exception | None, Any], bool]) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def should_retry(self, attempt: int, error: Exception | None, response: Any) -> bool:
        return bool(self.func(attempt, error, response))


def build_retry_decider(retry_on: Any) -> BaseRetryDecider:
    """Resolve a ``retry_on`` option into a retry decider.

    Args:
        retry_on: A validated ``retry_on`` option: a predicate function
            or a collection of HTTP status codes.

    Returns:
        The retry decider.

    Example:
        ```pycon
        >>> from aresfetch.retry import build_retry_decider
        >>> build_retry_decider([503])
        StatusCodeDecider(status_codes=[503])

        ```
    """
    if callable(retry_on):
        return FunctionDecider(retry_on)
    return StatusCodeDecider(retry_on)
