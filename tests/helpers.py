from __future__ import annotations

from relocation_api.core.models import (
    Advisory,
    AirQuality,
    Availability,
    CountryDataSet,
    HealthIndicators,
    Profile,
    Weather,
)
from relocation_api.providers.country_data import CountryNotFoundError

# Rough, plausible snapshots of what the five sources return
SAMPLE_COUNTRIES = {
    "portugal": dict(
        profile=Profile(iso2="PT", name="Portugal", capital="Lisbon", population=10_300_000),
        health=HealthIndicators(life_expectancy=81.1, healthcare_expenditure=10.6),
        weather=Weather(temp=22.0, temp_min=19.0, temp_max=25.0, humidity=55,
                        wind_speed=3.1, condition_code=800),
        air_quality=AirQuality(aqi=32),
        advisory=Advisory(score=1.3),
    ),
    "india": dict(
        profile=Profile(iso2="IN", name="India", capital="New Delhi", population=1_400_000_000),
        health=HealthIndicators(life_expectancy=67.2, healthcare_expenditure=3.3),
        weather=Weather(temp=38.0, temp_min=30.0, temp_max=42.0, humidity=20,
                        wind_speed=4.0, condition_code=721),
        air_quality=AirQuality(aqi=180),
        advisory=Advisory(score=2.6),
    ),
    "japan": dict(
        profile=Profile(iso2="JP", name="Japan", capital="Tokyo", population=125_000_000),
        health=HealthIndicators(life_expectancy=84.5, healthcare_expenditure=10.9),
        weather=Weather(temp=18.0, temp_min=15.0, temp_max=21.0, humidity=60,
                        wind_speed=5.0, condition_code=500),
        air_quality=AirQuality(aqi=45),
        advisory=Advisory(score=1.4),
    ),
}


def make_country(name: str, **sections) -> CountryDataSet:
    return CountryDataSet(
        country=name,
        availability=Availability(**{k: True for k in Availability.model_fields}),
        **sections,
    )


class FakeFetcher:
    """Stands in for fetch_country_data; records every call."""

    def __init__(self, countries: dict | None = None):
        self.countries = SAMPLE_COUNTRIES if countries is None else countries
        self.calls: list[str] = []

    async def __call__(self, name: str) -> CountryDataSet:
        self.calls.append(name)
        sections = self.countries.get(name.lower())
        if sections is None:
            raise CountryNotFoundError(f'Country "{name}" not found or REST Countries API unavailable.')
        return make_country(name, **sections)
