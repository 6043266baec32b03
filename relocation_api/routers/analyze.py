"""
relocation_api/routers/analyze.py
═══════════════════════════════════════════════════════════════════════════════
POST /api/analyze

Body:
{
  "countries":     ["Portugal", "Japan", "Canada"],   ← 3–10 names
  "riskTolerance": "low" | "moderate" | "high",
  "duration":      "short" | "long"
}

Returns:
  200 → {success, meta, weight_profile, ranked_results, failed_countries}
  400 → {success: false, errors: [...]}          invalid body
  404 → {success: false, message, errors: [...]} no country could be fetched
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from datetime import datetime
from typing import Any

import pytz
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from relocation_api.core.cache import country_cache
from relocation_api.core.config import MAX_COUNTRIES, MIN_COUNTRIES, VALID_DURATION, VALID_RISK
from relocation_api.core.models import RankedResult
from relocation_api.providers.country_data import fetch_country_data
from relocation_api.services.analyzer import AnalysisResult, NoValidCountriesError, analyze

log    = logging.getLogger("analyze_router")
router = APIRouter(prefix="/api", tags=["analyze"])


def validate_request(body) -> list[str]:
    if not isinstance(body, dict):
        return ["Request body must be a JSON object."]
    errors = []
    countries = body.get("countries")
    risk      = body.get("riskTolerance")
    duration  = body.get("duration")

    if not isinstance(countries, list) or len(countries) < MIN_COUNTRIES:
        errors.append(f'"countries" must be an array of at least {MIN_COUNTRIES} country names.')
    elif len(countries) > MAX_COUNTRIES:
        errors.append(f"Maximum {MAX_COUNTRIES} countries per request.")
    elif any(not isinstance(c, str) or not c.strip() for c in countries):
        errors.append('All entries in "countries" must be non-empty strings.')

    if not isinstance(risk, str) or risk.strip().lower() not in VALID_RISK:
        errors.append(f'"riskTolerance" must be one of: {", ".join(VALID_RISK)}.')
    if not isinstance(duration, str) or duration.strip().lower() not in VALID_DURATION:
        errors.append(f'"duration" must be one of: {", ".join(VALID_DURATION)}.')
    return errors


def _result_json(r: RankedResult) -> dict:
    d = r.data
    return {
        "rank":       r.rank,
        "rank_label": r.rank_label,
        "country":    r.country,
        "profile": {
            "official_name": d.profile.name,
            "capital":       d.profile.capital,
            "population":    d.profile.population,
            "currencies":    d.profile.currencies,
            "region":        d.profile.region,
            "subregion":     d.profile.subregion,
            "languages":     d.profile.languages,
            "flag_url":      d.profile.flag,
        },
        "raw_data": {
            "life_expectancy_years":          d.health.life_expectancy,
            "healthcare_expenditure_gdp_pct": d.health.healthcare_expenditure,
            "weather":                        d.weather.model_dump(),
            "aqi":                            d.air_quality.model_dump(),
            "travel_advisory":                d.advisory.model_dump(),
        },
        "data_availability": d.availability.model_dump(),
        "cache_hit":         r.cache_hit,
        "scores": {
            "travel_risk_score":             r.travel_risk.model_dump(),
            "health_infrastructure_score":   r.health_infrastructure.model_dump(),
            "environmental_stability_score": r.environmental_stability.model_dump(),
            "composite_score":               r.composite_score,
            "reasoning":                     r.reasoning,
        },
    }


def build_response(result: AnalysisResult, ttl_minutes: float) -> dict:
    counts = result.counts
    return {
        "success": True,
        "meta": {
            "query": {
                "countries":     result.countries,
                "riskTolerance": result.risk_tolerance,
                "duration":      result.duration,
            },
            "performance": {
                "response_time_ms":   result.elapsed_ms,
                "countries_analyzed": counts["analyzed"],
                "countries_failed":   counts["failed"],
            },
            "cache": {
                "hits":        result.cache_hits,
                "misses":      result.cache_misses,
                "ttl_minutes": ttl_minutes,
            },
            "generated_at": datetime.now(pytz.utc).isoformat(),
        },
        "weight_profile":   result.weights.rounded(),
        "ranked_results":   [_result_json(r) for r in result.ranked],
        "failed_countries": result.failed,
    }


@router.post("/analyze")
async def post_analyze(body: Any = Body(None)):
    errors = validate_request(body)
    if errors:
        log.info(f"Rejected request: {errors}")
        return JSONResponse(status_code=400, content={"success": False, "errors": errors})

    try:
        result = await analyze(
            body["countries"], body["riskTolerance"], body["duration"],
            cache=country_cache, fetcher=fetch_country_data,
        )
    except NoValidCountriesError as ex:
        return JSONResponse(status_code=404, content={
            "success": False,
            "message": str(ex),
            "errors":  ex.failed,
        })

    return build_response(result, country_cache.stats()["ttl_minutes"])
