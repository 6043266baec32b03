"""
relocation_api/core/http_client.py
Shared async httpx client for every upstream source.
  • plain_client() → keyless client; API keys travel as query params
The client timeout is the only per-call deadline in the system: the analyzer
waits for every country, so no upstream call may hang indefinitely.
"""

import httpx

from relocation_api.core.config import HTTP_TIMEOUT_S

_plain_client: httpx.AsyncClient | None = None

_LIMITS  = httpx.Limits(max_connections=20, max_keepalive_connections=10)
_TIMEOUT = httpx.Timeout(HTTP_TIMEOUT_S, connect=HTTP_TIMEOUT_S / 2)


def plain_client() -> httpx.AsyncClient:
    global _plain_client
    if _plain_client is None or _plain_client.is_closed:
        _plain_client = httpx.AsyncClient(
            timeout=_TIMEOUT,
            follow_redirects=True,
            limits=_LIMITS,
            headers={"Accept": "application/json"},
        )
    return _plain_client


async def close_all() -> None:
    global _plain_client
    if _plain_client and not _plain_client.is_closed:
        await _plain_client.aclose()
    _plain_client = None
