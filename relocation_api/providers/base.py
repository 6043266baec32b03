"""
relocation_api/providers/base.py
Shared plumbing for the source adapters.
  • get_json()   → GET + status check + JSON decode, raises on any failure
  • timed_call() → runs one adapter, logs duration, turns failure into None
"""

import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from relocation_api.core.http_client import plain_client

log = logging.getLogger("providers")

T = TypeVar("T")


class SourceError(Exception):
    """An upstream source answered, but not with usable data."""


async def get_json(url: str, params: Optional[dict] = None) -> Any:
    client = plain_client()
    resp = await client.get(url, params=params)
    if resp.status_code != 200:
        raise SourceError(f"HTTP {resp.status_code} from {resp.url.host}")
    try:
        return resp.json()
    except ValueError as ex:
        raise SourceError(f"Invalid JSON from {resp.url.host}: {ex}") from ex


async def timed_call(api: str, country: str, fn: Callable[[], Awaitable[T]]) -> Optional[T]:
    """Run one source adapter; a failure is logged and becomes None."""
    t0 = time.monotonic()
    try:
        result = await fn()
    except Exception as ex:
        elapsed_ms = round((time.monotonic() - t0) * 1000)
        log.warning(f"{api} → {country} failed after {elapsed_ms}ms: {ex}")
        return None
    elapsed_ms = round((time.monotonic() - t0) * 1000)
    log.info(f"{api} → {country} ok in {elapsed_ms}ms")
    return result
