"""
relocation_api/scoring/dimensions.py
═══════════════════════════════════════════════════════════════════════════════
The three intelligence scores. Each is a weighted sum of normalized
sub-components, every sub-component already on 0–100 (100 = best):

  Travel Risk (higher = safer)
      temperature_comfort  0.20   |temp − 21.5 °C| over 0–40, lower better
      air_quality          0.30   AQI 0–300, lower better
      travel_advisory      0.35   advisory 1–5, lower better
      weather_event        0.15   100 − severity penalty of condition code

  Health Infrastructure
      healthcare_expenditure 0.40  % GDP 1–15, higher better
      life_expectancy        0.45  years 45–90, higher better
      population_pressure    0.15  log10(pop) over log10(1e5)–log10(2e9), lower better

  Environmental Stability
      air_quality_stability  0.35  AQI 0–300, lower better
      temperature_volatility 0.25  temp_max − temp_min over 0–20 °C, lower better
      wind_comfort           0.15  wind 0–20 m/s, lower better
      humidity_comfort       0.25  |humidity − 45 %| over 0–55, lower better

A missing input scores NEUTRAL_SCORE for its sub-component only.
═══════════════════════════════════════════════════════════════════════════════
"""

import math

from relocation_api.core.models import CountryDataSet, ScoreBreakdown
from relocation_api.scoring.normalize import (
    NEUTRAL_SCORE, is_missing, normalize, round_half_up, weather_severity_penalty,
)

IDEAL_TEMP_C     = 21.5
IDEAL_HUMIDITY   = 45.0
POP_LOG_MIN      = math.log10(1e5)
POP_LOG_MAX      = math.log10(2e9)

TRAVEL_RISK_WEIGHTS = {
    "temperature_comfort": 0.20,
    "air_quality":         0.30,
    "travel_advisory":     0.35,
    "weather_event":       0.15,
}
HEALTH_INFRA_WEIGHTS = {
    "healthcare_expenditure": 0.40,
    "life_expectancy":        0.45,
    "population_pressure":    0.15,
}
ENV_STABILITY_WEIGHTS = {
    "air_quality_stability":  0.35,
    "temperature_volatility": 0.25,
    "wind_comfort":           0.15,
    "humidity_comfort":       0.25,
}


def _combine(components: dict[str, int], weights: dict[str, float]) -> ScoreBreakdown:
    raw = sum(components[name] * w for name, w in weights.items())
    return ScoreBreakdown(
        score=round_half_up(max(0.0, min(100.0, raw))),
        components=components,
    )


def temperature_comfort(temp) -> int:
    if is_missing(temp):
        return NEUTRAL_SCORE
    return normalize(abs(temp - IDEAL_TEMP_C), 0, 40, higher_is_better=False)


def weather_event(condition_code) -> int:
    if condition_code is None:
        return NEUTRAL_SCORE
    return 100 - weather_severity_penalty(condition_code)


def population_pressure(population) -> int:
    # zero or absent population has no logarithm
    if not population:
        return NEUTRAL_SCORE
    return normalize(math.log10(population), POP_LOG_MIN, POP_LOG_MAX, higher_is_better=False)


def temperature_volatility(temp_min, temp_max) -> int:
    if is_missing(temp_min) or is_missing(temp_max):
        return NEUTRAL_SCORE
    return normalize(temp_max - temp_min, 0, 20, higher_is_better=False)


def humidity_comfort(humidity) -> int:
    if is_missing(humidity):
        return NEUTRAL_SCORE
    return normalize(abs(humidity - IDEAL_HUMIDITY), 0, 55, higher_is_better=False)


def compute_travel_risk(data: CountryDataSet) -> ScoreBreakdown:
    weather = data.weather
    components = {
        "temperature_comfort": temperature_comfort(weather.temp),
        "air_quality":         normalize(data.air_quality.aqi, 0, 300, higher_is_better=False),
        "travel_advisory":     normalize(data.advisory.score, 1, 5, higher_is_better=False),
        "weather_event":       weather_event(weather.condition_code),
    }
    return _combine(components, TRAVEL_RISK_WEIGHTS)


def compute_health_infrastructure(data: CountryDataSet) -> ScoreBreakdown:
    components = {
        "healthcare_expenditure": normalize(data.health.healthcare_expenditure, 1, 15),
        "life_expectancy":        normalize(data.health.life_expectancy, 45, 90),
        "population_pressure":    population_pressure(data.profile.population),
    }
    return _combine(components, HEALTH_INFRA_WEIGHTS)


def compute_environmental_stability(data: CountryDataSet) -> ScoreBreakdown:
    weather = data.weather
    components = {
        "air_quality_stability":  normalize(data.air_quality.aqi, 0, 300, higher_is_better=False),
        "temperature_volatility": temperature_volatility(weather.temp_min, weather.temp_max),
        "wind_comfort":           normalize(weather.wind_speed, 0, 20, higher_is_better=False),
        "humidity_comfort":       humidity_comfort(weather.humidity),
    }
    return _combine(components, ENV_STABILITY_WEIGHTS)
