"""
relocation_api/providers/restcountries.py
REST Countries v3 (free, no key).

Endpoint used:
  /v3.1/name/{name}?fullText=true   → exact-name match, first record wins

The profile is the only mandatory source: its ISO2 code and capital drive
every other lookup.
"""

from urllib.parse import quote

from relocation_api.core.config import RESTCOUNTRIES_BASE
from relocation_api.core.models import Profile
from relocation_api.providers.base import SourceError, get_json


def _currencies(raw: dict) -> str | None:
    parts = [f"{c.get('name', '')} ({c.get('symbol') or '?'})" for c in (raw or {}).values()]
    return ", ".join(parts) or None


def parse_profile(c: dict, fallback_name: str) -> Profile:
    return Profile(
        iso2=c.get("cca2"),
        iso3=c.get("cca3"),
        name=(c.get("name") or {}).get("common") or fallback_name,
        capital=(c.get("capital") or [None])[0],
        population=c.get("population") or None,
        region=c.get("region") or None,
        subregion=c.get("subregion") or None,
        currencies=_currencies(c.get("currencies")),
        languages=", ".join((c.get("languages") or {}).values()) or None,
        flag=(c.get("flags") or {}).get("png"),
    )


async def fetch_profile(country_name: str) -> Profile:
    data = await get_json(
        f"{RESTCOUNTRIES_BASE}/name/{quote(country_name)}",
        params={"fullText": "true"},
    )
    if not isinstance(data, list) or not data:
        raise SourceError("No country data returned")
    return parse_profile(data[0], country_name)
