from __future__ import annotations

import asyncio

import pytest

from relocation_api.core.cache import TTLCache
from relocation_api.core.models import CountryDataSet
from relocation_api.services.analyzer import NoValidCountriesError, analyze, dedupe_countries

from tests.helpers import FakeFetcher


def test_dedupe_is_case_insensitive_and_keeps_first_spelling():
    assert dedupe_countries(["Spain", "spain ", "France", "SPAIN", " Chile", ""]) == [
        "Spain", "France", "Chile",
    ]


def test_analyze_ranks_valid_countries(fake_fetcher):
    result = asyncio.run(analyze(
        ["India", "Portugal", "Japan"], "moderate", "long",
        cache=TTLCache(), fetcher=fake_fetcher,
    ))
    names = [r.country for r in result.ranked]
    assert sorted(names) == ["India", "Japan", "Portugal"]
    assert names[-1] == "India"
    assert [r.rank for r in result.ranked] == [1, 2, 3]
    composites = [r.composite_score for r in result.ranked]
    assert composites == sorted(composites, reverse=True)
    assert result.failed == []
    assert result.counts == {"analyzed": 3, "failed": 0, "cache_hits": 0, "cache_misses": 3}


def test_one_failing_country_does_not_sink_the_request(fake_fetcher):
    result = asyncio.run(analyze(
        ["Portugal", "Atlantis", "Japan"], "low", "short",
        cache=TTLCache(), fetcher=fake_fetcher,
    ))
    assert sorted(r.country for r in result.ranked) == ["Japan", "Portugal"]
    assert len(result.failed) == 1
    assert result.failed[0]["country"] == "Atlantis"
    assert result.failed[0]["reason"].startswith("Failed to retrieve data: Country \"Atlantis\" not found")
    assert result.counts["failed"] == 1


def test_no_valid_countries_raises_before_scoring(fake_fetcher):
    with pytest.raises(NoValidCountriesError) as exc:
        asyncio.run(analyze(
            ["Atlantis", "Lemuria", "Mu"], "high", "long",
            cache=TTLCache(), fetcher=fake_fetcher,
        ))
    assert [f["country"] for f in exc.value.failed] == ["Atlantis", "Lemuria", "Mu"]


def test_unexpected_provider_error_is_isolated():
    async def flaky(name: str) -> CountryDataSet:
        if name == "Japan":
            raise RuntimeError("connection reset")
        return await FakeFetcher()(name)

    result = asyncio.run(analyze(
        ["Portugal", "Japan", "India"], "moderate", "short",
        cache=TTLCache(), fetcher=flaky,
    ))
    assert result.failed == [{"country": "Japan", "reason": "Failed to retrieve data: connection reset"}]
    assert len(result.ranked) == 2


def test_not_found_dataset_from_fetcher_is_partitioned():
    async def fetcher(name: str) -> CountryDataSet:
        if name == "Mu":
            return CountryDataSet.not_found(name, "no such place")
        return await FakeFetcher()(name)

    result = asyncio.run(analyze(
        ["Portugal", "Mu", "Japan"], "moderate", "short",
        cache=TTLCache(), fetcher=fetcher,
    ))
    assert result.failed == [{"country": "Mu", "reason": "no such place"}]


def test_second_request_is_served_from_cache(fake_fetcher):
    cache = TTLCache()

    async def run():
        first = await analyze(["Portugal", "Japan", "India"], "low", "long", cache=cache, fetcher=fake_fetcher)
        second = await analyze(["japan", "PORTUGAL", "India"], "low", "long", cache=cache, fetcher=fake_fetcher)
        return first, second

    first, second = asyncio.run(run())
    assert len(fake_fetcher.calls) == 3
    assert first.cache_hits == []
    assert second.cache_hits == ["japan", "PORTUGAL", "India"]
    assert all(r.cache_hit for r in second.ranked)
    assert second.counts["cache_misses"] == 0


def test_failed_country_is_retried_on_next_request(fake_fetcher):
    cache = TTLCache()

    async def run():
        await analyze(["Portugal", "Atlantis", "Japan"], "low", "long", cache=cache, fetcher=fake_fetcher)
        await analyze(["Portugal", "Atlantis", "Japan"], "low", "long", cache=cache, fetcher=fake_fetcher)

    asyncio.run(run())
    assert fake_fetcher.calls.count("Atlantis") == 2
    assert fake_fetcher.calls.count("Portugal") == 1


def test_concurrent_requests_fetch_each_country_once():
    cache = TTLCache()
    fetcher = FakeFetcher()

    async def slow(name: str) -> CountryDataSet:
        await asyncio.sleep(0.02)
        return await fetcher(name)

    async def run():
        return await asyncio.gather(*(
            analyze(["Portugal", "Japan", "India"], "moderate", "short", cache=cache, fetcher=slow)
            for _ in range(4)
        ))

    results = asyncio.run(run())
    assert sorted(fetcher.calls) == ["India", "Japan", "Portugal"]
    assert all(r.counts["analyzed"] == 3 for r in results)


def test_weights_are_resolved_once_per_request(fake_fetcher):
    result = asyncio.run(analyze(
        ["Portugal", "Japan", "India"], "HIGH", "Short",
        cache=TTLCache(), fetcher=fake_fetcher,
    ))
    assert result.risk_tolerance == "high" and result.duration == "short"
    assert result.weights.rounded()["environmental_stability_score"] == pytest.approx(0.448, abs=1e-3)
    for r in result.ranked:
        assert r.reasoning[-1].startswith("For your profile (high/short), Environmental Stability")


def test_invalid_profile_fails_before_any_fetch(fake_fetcher):
    with pytest.raises(ValueError):
        asyncio.run(analyze(["Portugal", "Japan", "India"], "yolo", "short",
                            cache=TTLCache(), fetcher=fake_fetcher))
    assert fake_fetcher.calls == []
