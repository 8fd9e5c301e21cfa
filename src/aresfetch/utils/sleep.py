r"""Timer used to wait between two attempts."""

from __future__ import annotations

__all__ = ["sleep_ms"]

import asyncio
import logging

logger: logging.Logger = logging.getLogger(__name__)


async def sleep_ms(delay: float) -> None:
    """Suspend the current task for ``delay`` milliseconds.

    The wait is a one-shot ``asyncio.sleep``: it never resumes before the
    delay has elapsed and resumes exactly once. A delay of 0 yields to
    the event loop for one iteration.

    Args:
        delay: The delay in milliseconds. Must be >= 0.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresfetch.utils.sleep import sleep_ms
        >>> asyncio.run(sleep_ms(10))

        ```
    """
    logger.debug(f"Waiting {delay:.0f}ms before retry")
    await asyncio.sleep(delay / 1000)
