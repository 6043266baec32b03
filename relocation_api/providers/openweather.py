"""
relocation_api/providers/openweather.py
OpenWeatherMap current weather for the capital (WEATHER_API_KEY).

  /data/2.5/weather?q={capital}&units=metric
"""

from relocation_api.core.config import OPENWEATHER_BASE, WEATHER_API_KEY
from relocation_api.core.models import Weather
from relocation_api.providers.base import get_json


def parse_weather(d: dict) -> Weather:
    main = d["main"]
    condition = (d.get("weather") or [{}])[0]
    return Weather(
        temp=main.get("temp"),
        feels_like=main.get("feels_like"),
        temp_min=main.get("temp_min"),
        temp_max=main.get("temp_max"),
        humidity=main.get("humidity"),
        wind_speed=(d.get("wind") or {}).get("speed"),
        visibility=d.get("visibility") or None,
        description=condition.get("description"),
        condition_code=condition.get("id"),
    )


async def fetch_weather(capital: str) -> Weather:
    data = await get_json(
        f"{OPENWEATHER_BASE}/weather",
        params={"q": capital, "appid": WEATHER_API_KEY, "units": "metric"},
    )
    return parse_weather(data)
