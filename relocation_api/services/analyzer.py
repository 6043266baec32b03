"""
relocation_api/services/analyzer.py
═══════════════════════════════════════════════════════════════════════════════
Per-request orchestration:

  1. Dedupe country names (case-insensitive, first spelling and order kept)
  2. One cache.get_or_fetch("country:<name>") per country, ALL concurrent
  3. A failed fetch becomes a not-found entry; siblings carry on
  4. No valid country left → NoValidCountriesError, nothing is scored
  5. Resolve weights once, score every valid country, rank

The analyzer waits for every fetch before scoring, so the slowest country
sets the response time. Upstream timeouts live in the http client.
═══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from relocation_api.core.cache import TTLCache, country_cache
from relocation_api.core.models import CountryDataSet, RankedResult
from relocation_api.providers.country_data import fetch_country_data
from relocation_api.scoring.ranking import rank_results, score_country
from relocation_api.scoring.weights import WeightProfile, resolve_weights

log = logging.getLogger("analyzer")

Fetcher = Callable[[str], Awaitable[CountryDataSet]]


class NoValidCountriesError(Exception):
    """None of the requested countries could be fetched."""

    def __init__(self, failed: list[dict]):
        super().__init__("None of the provided countries could be found or processed.")
        self.failed = failed


@dataclass
class AnalysisResult:
    countries:      list[str]
    risk_tolerance: str
    duration:       str
    weights:        WeightProfile
    ranked:         list[RankedResult]
    failed:         list[dict]
    cache_hits:     list[str] = field(default_factory=list)
    cache_misses:   list[str] = field(default_factory=list)
    elapsed_ms:     int = 0

    @property
    def counts(self) -> dict:
        return {
            "analyzed":     len(self.ranked),
            "failed":       len(self.failed),
            "cache_hits":   len(self.cache_hits),
            "cache_misses": len(self.cache_misses),
        }


def dedupe_countries(countries: list[str]) -> list[str]:
    seen: set[str] = set()
    out = []
    for name in countries:
        name = name.strip()
        key = name.lower()
        if name and key not in seen:
            seen.add(key)
            out.append(name)
    return out


async def _load(name: str, cache: TTLCache, fetcher: Fetcher) -> tuple[CountryDataSet, bool]:
    try:
        return await cache.get_or_fetch(f"country:{name.lower()}", lambda: fetcher(name))
    except Exception as ex:
        log.error(f"Failed to fetch data for {name}: {ex}")
        return CountryDataSet.not_found(name, f"Failed to retrieve data: {ex}"), False


async def analyze(
    countries: list[str],
    risk_tolerance: str,
    duration: str,
    *,
    cache: TTLCache = country_cache,
    fetcher: Fetcher = fetch_country_data,
) -> AnalysisResult:
    t0 = time.time()
    rt, dur = risk_tolerance.strip().lower(), duration.strip().lower()
    weights = resolve_weights(rt, dur)   # ValueError on bad input, before any fetch
    unique = dedupe_countries(countries)
    log.info(f"Analyzing {len(unique)} countries {unique} ({rt}/{dur})")

    outcomes = await asyncio.gather(*(_load(name, cache, fetcher) for name in unique))

    valid, failed = [], []
    hits, misses = [], []
    for name, (data, hit) in zip(unique, outcomes):
        (hits if hit else misses).append(name)
        if data.found:
            valid.append((data, hit))
        else:
            failed.append({"country": data.country, "reason": data.error})

    if not valid:
        log.warning(f"No valid countries in request {unique}")
        raise NoValidCountriesError(failed)

    scored = [score_country(data, weights, rt, dur, cache_hit=hit) for data, hit in valid]
    result = AnalysisResult(
        countries=unique,
        risk_tolerance=rt,
        duration=dur,
        weights=weights,
        ranked=rank_results(scored),
        failed=failed,
        cache_hits=hits,
        cache_misses=misses,
        elapsed_ms=round((time.time() - t0) * 1000),
    )
    log.info(f"Analysis complete in {result.elapsed_ms}ms {result.counts}")
    return result
