r"""Delay strategy computed by a user-supplied function."""

from __future__ import annotations

__all__ = ["FunctionDelay"]

import math
from typing import TYPE_CHECKING, Any

from aresfetch.delay.base import BaseDelayStrategy
from aresfetch.exceptions import ArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable


def _is_valid_delay(delay: Any) -> bool:
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        return False
    try:
        return math.isfinite(delay) and delay >= 0
    except OverflowError:
        # int too large to convert to float
        return False


class FunctionDelay(BaseDelayStrategy):
    """Delay strategy delegating to a ``retry_delay`` function.

    The function is called synchronously with the outcome of the attempt
    that just completed. Exceptions raised by the function propagate to
    the caller unchanged.

    Args:
        func: A function ``(attempt, error, response)`` returning the
            delay in milliseconds.

    Example:
        ```pycon
        >>> from aresfetch.delay import FunctionDelay
        >>> delay = FunctionDelay(lambda attempt, error, response: 2**attempt * 100)
        >>> delay.calculate(3, None, None)
        800

        ```
    """

    def __init__(self, func: Callable[[int, Exception | None, Any], float]) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(self, attempt: int, error: Exception | None, response: Any) -> float:
        """Call the function and check its result.

        Raises:
            ArgumentError: If the function does not return a
                non-negative number.
        """
        delay = self.func(attempt, error, response)
        if not _is_valid_delay(delay):
            msg = f"retry_delay function must return a non-negative number, got {delay!r}"
            raise ArgumentError(msg)
        return delay
