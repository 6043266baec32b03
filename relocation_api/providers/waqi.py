"""
relocation_api/providers/waqi.py
World Air Quality Index feed for the capital (AQI_API_KEY).

  /feed/{capital}/?token=...   → {"status": "ok", "data": {...}}
WAQI answers HTTP 200 with status "error" for unknown cities and bad tokens.
"""

from urllib.parse import quote

from relocation_api.core.config import AQI_API_KEY, WAQI_BASE
from relocation_api.core.models import AirQuality
from relocation_api.providers.base import SourceError, get_json


async def fetch_air_quality(capital: str) -> AirQuality:
    body = await get_json(f"{WAQI_BASE}/feed/{quote(capital)}/", params={"token": AQI_API_KEY})
    if body.get("status") != "ok":
        raise SourceError(f"WAQI status: {body.get('status')}")
    d = body["data"]
    aqi = d.get("aqi")
    return AirQuality(
        # WAQI reports "-" when a station has no current reading
        aqi=float(aqi) if isinstance(aqi, (int, float)) else None,
        dominant_pollutant=d.get("dominentpol") or None,
        station=(d.get("city") or {}).get("name") or capital,
    )
