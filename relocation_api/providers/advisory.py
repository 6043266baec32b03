"""
relocation_api/providers/advisory.py
travel-advisory.info (free, no key).

  /api?countrycode={iso2}   → {"data": {ISO2: {"advisory": {...}}}}
"""

from relocation_api.core.config import ADVISORY_BASE
from relocation_api.core.models import Advisory
from relocation_api.providers.base import SourceError, get_json


async def fetch_advisory(iso2: str) -> Advisory:
    body = await get_json(ADVISORY_BASE, params={"countrycode": iso2})
    entry = (body.get("data") or {}).get(iso2)
    if not entry:
        raise SourceError("No advisory data")
    a = entry.get("advisory") or {}
    return Advisory(
        score=a.get("score"),
        message=a.get("message") or "No message available",
        sources_active=a.get("sources_active") or 0,
    )
