"""httpx client construction."""

from __future__ import annotations

import httpx

from sharepoint_webparts.rest.models import HEADER_ACCEPT, ODATA_VERBOSE


def build_async_client(
    *,
    timeout_seconds: float,
    user_agent: str,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the defaults every SharePoint call shares.

    Args:
        timeout_seconds: Timeout applied to connect, read, write and pool waits.
        user_agent: Value of the User-Agent header.
        extra_headers: Additional default headers, overriding the built-in ones.

    Returns:
        A client ready for concurrent use. The caller owns it and must close it.
    """
    headers: dict[str, str] = {
        "User-Agent": user_agent,
        HEADER_ACCEPT: ODATA_VERBOSE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )
