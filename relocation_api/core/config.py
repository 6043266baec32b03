"""
relocation_api/core/config.py  ── Relocation & Travel Decision Engine
═══════════════════════════════════════════════════════════════════════════════
SOURCE ASSIGNMENT:

  REST Countries v3     →  profile: ISO codes, capital, population, region,
                            currencies, languages, flag (free, no key)

  World Bank API        →  life expectancy + healthcare expenditure % GDP
                            (free, no key)

  OpenWeatherMap        →  current weather for the capital (WEATHER_API_KEY)

  WAQI                  →  air quality index for the capital (AQI_API_KEY)

  travel-advisory.info  →  advisory score 1.0 (safe) – 5.0 (do not travel)

Every value can be overridden from the environment.
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
import os

log = logging.getLogger("config")

# ── API keys ──────────────────────────────────────────────────────────────────
# SECURITY: keys must come from the environment, never from source.
WEATHER_API_KEY = os.environ.get("WEATHER_API_KEY", "")
AQI_API_KEY     = os.environ.get("AQI_API_KEY", "")
if not WEATHER_API_KEY:
    log.warning("WEATHER_API_KEY env var not set, OpenWeatherMap requests will fail with 401")
if not AQI_API_KEY:
    log.warning("AQI_API_KEY env var not set, WAQI requests will return status 'error'")

# ── Source endpoints ──────────────────────────────────────────────────────────
RESTCOUNTRIES_BASE = os.environ.get("RESTCOUNTRIES_BASE", "https://restcountries.com/v3.1")
WORLDBANK_BASE     = os.environ.get("WORLDBANK_BASE", "https://api.worldbank.org/v2")
OPENWEATHER_BASE   = os.environ.get("OPENWEATHER_BASE", "https://api.openweathermap.org/data/2.5")
WAQI_BASE          = os.environ.get("WAQI_BASE", "https://api.waqi.info")
ADVISORY_BASE      = os.environ.get("ADVISORY_BASE", "https://www.travel-advisory.info/api")

# World Bank indicator codes
WB_LIFE_EXPECTANCY = "SP.DYN.LE00.IN"      # life expectancy at birth, years
WB_HEALTH_EXPENDITURE = "SH.XPD.CHEX.GD.ZS"  # current health expenditure, % of GDP

# ── Runtime ───────────────────────────────────────────────────────────────────
LOG_LEVEL      = os.environ.get("LOG_LEVEL", "INFO").upper()
CACHE_TTL_S    = int(os.environ.get("CACHE_TTL_S", 60 * 60))   # 60 min
HTTP_TIMEOUT_S = float(os.environ.get("HTTP_TIMEOUT_S", 8.0))  # per upstream call
PORT           = int(os.environ.get("PORT", 3001))

# ── Request limits ────────────────────────────────────────────────────────────
MIN_COUNTRIES  = 3
MAX_COUNTRIES  = 10
VALID_RISK     = ("low", "moderate", "high")
VALID_DURATION = ("short", "long")
