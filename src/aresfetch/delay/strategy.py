r"""Resolution of a ``retry_delay`` option into a delay strategy."""

from __future__ import annotations

__all__ = ["build_delay_strategy"]

from typing import Any

from aresfetch.delay.base import BaseDelayStrategy
from aresfetch.delay.constant import ConstantDelay
from aresfetch.delay.function import FunctionDelay


def build_delay_strategy(retry_delay: Any) -> BaseDelayStrategy:
    """Resolve a ``retry_delay`` option into a delay strategy.

    The option is either a constant or a computed delay:

    - a ``BaseDelayStrategy`` instance is returned as is
    - any other callable is wrapped in a ``FunctionDelay``
    - a number is wrapped in a ``ConstantDelay``

    Args:
        retry_delay: A validated ``retry_delay`` option.

    Returns:
        The delay strategy.

    Example:
        ```pycon
        >>> from aresfetch.delay import build_delay_strategy
        >>> build_delay_strategy(500)
        ConstantDelay(delay=500)

        ```
    """
    if isinstance(retry_delay, BaseDelayStrategy):
        return retry_delay
    if callable(retry_delay):
        return FunctionDelay(retry_delay)
    return ConstantDelay(retry_delay)
