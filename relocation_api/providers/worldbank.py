"""
relocation_api/providers/worldbank.py
World Bank indicators API (free, no key).

  /v2/country/{iso2}/indicator/{code}?format=json&mrv=3
      → [meta, [record, ...]] newest first; first non-null value wins
"""

import asyncio
from typing import Optional

from relocation_api.core.config import (
    WB_HEALTH_EXPENDITURE, WB_LIFE_EXPECTANCY, WORLDBANK_BASE,
)
from relocation_api.core.models import HealthIndicators
from relocation_api.providers.base import get_json


async def fetch_indicator(iso2: str, indicator: str) -> Optional[float]:
    data = await get_json(
        f"{WORLDBANK_BASE}/country/{iso2}/indicator/{indicator}",
        params={"format": "json", "mrv": 3, "per_page": 3},
    )
    records = data[1] if isinstance(data, list) and len(data) > 1 else None
    for record in records or []:
        if record.get("value") is not None:
            return float(record["value"])
    return None


async def fetch_health_indicators(iso2: str) -> HealthIndicators:
    life, spend = await asyncio.gather(
        fetch_indicator(iso2, WB_LIFE_EXPECTANCY),
        fetch_indicator(iso2, WB_HEALTH_EXPENDITURE),
    )
    return HealthIndicators(life_expectancy=life, healthcare_expenditure=spend)
