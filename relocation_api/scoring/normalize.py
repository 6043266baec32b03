"""
relocation_api/scoring/normalize.py
Min-max normalization of raw metrics onto a 0–100 score, plus the
OpenWeatherMap condition-code severity table.
"""

import math
from typing import Optional

NEUTRAL_SCORE = 50


def round_half_up(x: float) -> int:
    """2.5 → 3, not 2. Built-in round() is banker's rounding."""
    return int(math.floor(x + 0.5))


def is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return True


def normalize(
    value: Optional[float],
    lo: float,
    hi: float,
    higher_is_better: bool = True,
    default: int = NEUTRAL_SCORE,
) -> int:
    """
    Scale value from [lo, hi] onto 0–100.
    Values outside the range are clamped; a missing or NaN value returns
    `default` untouched. lo == hi has no meaningful scale and raises.
    """
    if lo == hi:
        raise ValueError(f"normalize() needs lo < hi, got lo == hi == {lo}")
    if is_missing(value):
        return default
    clamped = max(lo, min(hi, value))
    ratio   = (clamped - lo) / (hi - lo)
    scaled  = ratio if higher_is_better else 1 - ratio
    return round_half_up(scaled * 100)


# https://openweathermap.org/weather-conditions
def weather_severity_penalty(condition_code: Optional[int]) -> int:
    """Penalty 0 (none) → 70 (thunderstorm) for an OpenWeatherMap weather id."""
    if not condition_code:
        return 0
    if 200 <= condition_code < 300: return 70   # thunderstorm
    if 300 <= condition_code < 400: return 20   # drizzle
    if 500 <= condition_code < 600: return 40   # rain
    if 600 <= condition_code < 700: return 60   # snow
    if 700 <= condition_code < 800: return 50   # atmosphere: fog, smoke, dust
    if condition_code == 800:       return 0    # clear sky
    if 800 < condition_code < 810:  return 10   # clouds
    return 0
