r"""Delay strategies for the wait between two attempts.

This package provides the strategies behind the ``retry_delay`` option.
All delays are expressed in milliseconds. Strategy instances are
callable, so they can be passed directly as ``retry_delay``.
"""

from __future__ import annotations

__all__ = [
    "BaseDelayStrategy",
    "ConstantDelay",
    "FunctionDelay",
    "build_delay_strategy",
]

from aresfetch.delay.base import BaseDelayStrategy
from aresfetch.delay.constant import ConstantDelay
from aresfetch.delay.function import FunctionDelay
from aresfetch.delay.strategy import build_delay_strategy
