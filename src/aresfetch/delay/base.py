r"""Abstract base class for delay strategies."""

from __future__ import annotations

__all__ = ["BaseDelayStrategy"]

from abc import ABC, abstractmethod
from typing import Any


class BaseDelayStrategy(ABC):
    """Abstract base class for delay strategies.

    A delay strategy determines how long to wait before the next attempt
    based on the outcome of the attempt that just completed. Strategies
    are callable with the same signature as a ``retry_delay`` function,
    so an instance can be passed directly as ``retry_delay``.
    """

    @abstractmethod
    def calculate(self, attempt: int, error: Exception | None, response: Any) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The index of the attempt that just completed
                (0-indexed). For example, attempt=0 means the first
                request failed and the first retry is about to be made.
            error: The exception raised by the attempt, if any.
            response: The response returned by the attempt, if any.

        Returns:
            The delay in milliseconds before the next attempt.
        """

    def __call__(self, attempt: int, error: Exception | None, response: Any) -> float:
        return self.calculate(attempt, error, response)
