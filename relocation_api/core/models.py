"""
relocation_api/core/models.py
Typed records passed between the providers, the scorer and the router.
Every metric is Optional: None means "source did not answer", which is
different from a legitimate zero.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    iso2:       Optional[str] = None
    iso3:       Optional[str] = None
    name:       Optional[str] = None
    capital:    Optional[str] = None
    population: Optional[int] = None
    region:     Optional[str] = None
    subregion:  Optional[str] = None
    currencies: Optional[str] = None
    languages:  Optional[str] = None
    flag:       Optional[str] = None


class HealthIndicators(BaseModel):
    life_expectancy:        Optional[float] = None   # years
    healthcare_expenditure: Optional[float] = None   # % of GDP


class Weather(BaseModel):
    temp:           Optional[float] = None   # °C
    feels_like:     Optional[float] = None
    temp_min:       Optional[float] = None
    temp_max:       Optional[float] = None
    humidity:       Optional[float] = None   # %
    wind_speed:     Optional[float] = None   # m/s
    visibility:     Optional[int] = None     # m
    description:    Optional[str] = None
    condition_code: Optional[int] = None     # OpenWeatherMap weather id


class AirQuality(BaseModel):
    aqi:                Optional[float] = None
    dominant_pollutant: Optional[str] = None
    station:            Optional[str] = None


class Advisory(BaseModel):
    score:          Optional[float] = None   # 1.0 safe → 5.0 do not travel
    message:        Optional[str] = None
    sources_active: int = 0


class Availability(BaseModel):
    profile:     bool = False
    health:      bool = False
    weather:     bool = False
    air_quality: bool = False
    advisory:    bool = False


class CountryDataSet(BaseModel):
    country:      str
    found:        bool = True
    error:        Optional[str] = None
    profile:      Profile = Field(default_factory=Profile)
    health:       HealthIndicators = Field(default_factory=HealthIndicators)
    weather:      Weather = Field(default_factory=Weather)
    air_quality:  AirQuality = Field(default_factory=AirQuality)
    advisory:     Advisory = Field(default_factory=Advisory)
    availability: Availability = Field(default_factory=Availability)

    @classmethod
    def not_found(cls, country: str, reason: str) -> "CountryDataSet":
        return cls(country=country, found=False, error=reason)


class ScoreBreakdown(BaseModel):
    score:      int
    components: dict[str, int]


class RankedResult(BaseModel):
    country:     str
    data:        CountryDataSet
    travel_risk: ScoreBreakdown
    health_infrastructure:   ScoreBreakdown
    environmental_stability: ScoreBreakdown
    composite_score: int
    reasoning:   list[str] = Field(default_factory=list)
    cache_hit:   bool = False
    rank:        int = 0
    rank_label:  str = ""
