"""
relocation_api/core/cache.py
═══════════════════════════════════════════════════════════════════════════
In-memory TTL cache with in-flight request coalescing.
  • get_or_fetch() is the only entry point the analyzer uses
  • Entries expire lazily: a read past expires_at deletes the entry
  • At most ONE producer runs per key; concurrent callers join its task
  • Failed producers never write → the next call retries
  • No sweeper: memory grows with distinct keys (country names, low cardinality)

All check-then-register steps run without an await in between, so the
asyncio event loop guarantees atomicity and no lock is needed.
═══════════════════════════════════════════════════════════════════════════
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from relocation_api.core.config import CACHE_TTL_S

log = logging.getLogger("cache")

Producer = Callable[[], Awaitable[Any]]


def normalize_key(key: str) -> str:
    return key.strip().lower()


class TTLCache:
    """Keyed store with lazy expiry plus one-producer-per-key coalescing."""

    def __init__(self, ttl_s: float = CACHE_TTL_S, clock: Callable[[], float] = time.time):
        self.ttl_s = ttl_s
        self._clock = clock
        self._store: dict[str, dict] = {}
        self._in_flight: dict[str, asyncio.Task] = {}
        self._hits = 0
        self._misses = 0
        self._joined = 0

    def _lookup(self, key: str) -> tuple[Optional[Any], bool]:
        e = self._store.get(key)
        if e is None:
            return None, False
        if self._clock() > e["expires_at"]:
            del self._store[key]
            log.debug(f"Evicted expired entry {key}")
            return None, False
        return e["value"], True

    def get(self, key: str) -> tuple[Optional[Any], bool]:
        """Return (value, True) for a live entry, (None, False) otherwise."""
        key = normalize_key(key)
        value, hit = self._lookup(key)
        log.info(f"{'HIT' if hit else 'MISS'} for {key}")
        return value, hit

    def set(self, key: str, value: Any) -> None:
        """Store a value. Never called with an error."""
        self._store[normalize_key(key)] = {
            "value":      value,
            "expires_at": self._clock() + self.ttl_s,
        }

    async def get_or_fetch(self, key: str, producer: Producer) -> tuple[Any, bool]:
        """
        Return (value, was_hit). A joined in-flight fetch counts as a miss.
        Raises whatever the producer raised; nothing is cached in that case.
        """
        key = normalize_key(key)
        value, hit = self._lookup(key)
        if hit:
            self._hits += 1
            log.info(f"HIT for {key}")
            return value, True

        self._misses += 1
        task = self._in_flight.get(key)
        if task is not None:
            self._joined += 1
            log.info(f"Reusing in-flight request for {key}")
            return await asyncio.shield(task), False

        log.info(f"MISS for {key}")
        # Registered before the first await so concurrent lookups can join
        task = asyncio.ensure_future(self._produce(key, producer))
        self._in_flight[key] = task
        return await asyncio.shield(task), False

    async def _produce(self, key: str, producer: Producer) -> Any:
        try:
            value = await producer()
        except Exception as ex:
            log.warning(f"Fetch for {key} failed, not cached: {ex}")
            raise
        else:
            self.set(key, value)
            return value
        finally:
            self._in_flight.pop(key, None)

    def stats(self) -> dict:
        """Counters only, no values. Served by /health."""
        total = self._hits + self._misses
        return {
            "cached_entries": len(self._store),
            "in_flight":      len(self._in_flight),
            "hits":           self._hits,
            "misses":         self._misses,
            "joined":         self._joined,
            "hit_rate":       round(self._hits / total * 100, 1) if total else 0.0,
            "ttl_minutes":    round(self.ttl_s / 60, 1),
        }

    def clear(self) -> None:
        self._store.clear()
        self._hits = 0
        self._misses = 0
        self._joined = 0


# Process-wide instance shared by every request
country_cache = TTLCache()
