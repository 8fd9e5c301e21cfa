r"""Retry package implementing the attempt loop.

Public API:
    - AsyncRetryExecutor: Asynchronous retry executor
    - BaseRetryDecider: Base class of the ``retry_on`` deciders
    - StatusCodeDecider: Retry on a set of response status codes
    - FunctionDecider: Retry according to a predicate function
    - build_retry_decider: Resolve a ``retry_on`` option
    - retry_on_network_error: Default ``retry_on`` predicate
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "BaseRetryDecider",
    "FunctionDecider",
    "StatusCodeDecider",
    "build_retry_decider",
    "retry_on_network_error",
]

from aresfetch.retry.decider import (
    BaseRetryDecider,
    FunctionDecider,
    StatusCodeDecider,
    build_retry_decider,
    retry_on_network_error,
)
from aresfetch.retry.executor import AsyncRetryExecutor
