from __future__ import annotations

import pytest

from relocation_api.core.cache import country_cache

from tests.helpers import FakeFetcher


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture(autouse=True)
def _fresh_country_cache():
    country_cache.clear()
    yield
    country_cache.clear()
