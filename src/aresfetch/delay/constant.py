r"""Constant delay strategy."""

from __future__ import annotations

__all__ = ["ConstantDelay"]

from typing import Any

from aresfetch.delay.base import BaseDelayStrategy


class ConstantDelay(BaseDelayStrategy):
    """Constant/fixed delay strategy.

    Returns the same delay before every retry, regardless of the attempt
    number or its outcome. This is the strategy used when ``retry_delay``
    is a number.

    Args:
        delay: The fixed delay in milliseconds (default: 1000).

    Example:
        ```pycon
        >>> from aresfetch.delay import ConstantDelay
        >>> delay = ConstantDelay(delay=2500)
        >>> delay.calculate(0, None, None)  # First retry
        2500
        >>> delay.calculate(10, None, None)  # Eleventh retry
        2500

        ```
    """

    def __init__(self, delay: float = 1000) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int, error: Exception | None, response: Any) -> float:  # noqa: ARG002
        """Calculate constant delay.

        Args:
            attempt: The attempt index (unused).
            error: The exception of the attempt (unused).
            response: The response of the attempt (unused).

        Returns:
            The fixed delay value in milliseconds.
        """
        return self.delay
