r"""Response inspection utilities.

The wrapped request function is opaque, so the response type is not
known in advance. This module extracts the HTTP status code from the
response types commonly returned by Python HTTP clients.
"""

from __future__ import annotations

__all__ = ["get_status_code"]

from collections.abc import Mapping
from typing import Any

import httpx


def get_status_code(response: Any) -> int | None:
    """Get the HTTP status code of a response.

    The following response shapes are supported:

    - ``httpx.Response`` and any object with a ``status_code``
      attribute (e.g. ``requests.Response``)
    - objects with a ``status`` attribute (e.g.
      ``aiohttp.ClientResponse``)
    - mappings with a ``"status"`` key

    Args:
        response: The response returned by the wrapped function.

    Returns:
        The status code, or ``None`` if the response has none.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresfetch.utils.response import get_status_code
        >>> get_status_code(httpx.Response(503))
        503
        >>> get_status_code({"status": 404})
        404
        >>> get_status_code(None) is None
        True

        ```
    """
    if isinstance(response, httpx.Response):
        return response.status_code
    if isinstance(response, Mapping):
        return response.get("status")
    status_code = getattr(response, "status_code", None)
    if status_code is not None:
        return status_code
    return getattr(response, "status", None)
