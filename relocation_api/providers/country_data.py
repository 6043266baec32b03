"""
relocation_api/providers/country_data.py
═══════════════════════════════════════════════════════════════════════════════
Merges the five sources into one CountryDataSet.

  1. REST Countries profile      (sequential: ISO2 + capital needed below)
  2. World Bank, OpenWeatherMap, WAQI, travel-advisory.info   (concurrent)

A missing profile means the country cannot be resolved at all → raise
CountryNotFoundError so the cache never stores the miss. Any of the four
secondary sources may fail; its section stays empty and the availability
flag is False, and the scorer falls back to neutral values.
═══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import logging

from relocation_api.core.models import (
    AirQuality, Advisory, Availability, CountryDataSet, HealthIndicators, Weather,
)
from relocation_api.providers.advisory import fetch_advisory
from relocation_api.providers.base import timed_call
from relocation_api.providers.openweather import fetch_weather
from relocation_api.providers.restcountries import fetch_profile
from relocation_api.providers.waqi import fetch_air_quality
from relocation_api.providers.worldbank import fetch_health_indicators

log = logging.getLogger("country_data")


class CountryNotFoundError(Exception):
    pass


async def _skip():
    return None


async def fetch_country_data(country_name: str) -> CountryDataSet:
    profile = await timed_call("REST_COUNTRIES", country_name, lambda: fetch_profile(country_name))
    if profile is None:
        raise CountryNotFoundError(
            f'Country "{country_name}" not found or REST Countries API unavailable.'
        )

    iso2, capital = profile.iso2, profile.capital
    health, weather, air, advisory = await asyncio.gather(
        timed_call("WORLD_BANK", country_name, lambda: fetch_health_indicators(iso2)) if iso2 else _skip(),
        timed_call("OPENWEATHERMAP", country_name, lambda: fetch_weather(capital)) if capital else _skip(),
        timed_call("WAQI_AQI", country_name, lambda: fetch_air_quality(capital)) if capital else _skip(),
        timed_call("TRAVEL_ADVISORY", country_name, lambda: fetch_advisory(iso2)) if iso2 else _skip(),
    )

    availability = Availability(
        profile=True,
        health=health is not None,
        weather=weather is not None,
        air_quality=air is not None,
        advisory=advisory is not None,
    )
    missing = [k for k, ok in availability.model_dump().items() if not ok]
    if missing:
        log.warning(f"{country_name}: partial data, missing {missing}")

    return CountryDataSet(
        country=country_name,
        found=True,
        profile=profile,
        health=health or HealthIndicators(),
        weather=weather or Weather(),
        air_quality=air or AirQuality(),
        advisory=advisory or Advisory(),
        availability=availability,
    )
