"""
relocation_api/scoring/ranking.py
═══════════════════════════════════════════════════════════════════════════════
Composite score, ranking and the plain-English reasoning attached to each
country.

  composite = round(clamp(Σ dimension_score × weight, 0, 100))

Ranking is a stable sort on composite (descending): equal composites keep
the order the countries were requested in.
═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from typing import Optional

from relocation_api.core.models import CountryDataSet, RankedResult, ScoreBreakdown
from relocation_api.scoring.dimensions import (
    compute_environmental_stability,
    compute_health_infrastructure,
    compute_travel_risk,
)
from relocation_api.scoring.normalize import is_missing, round_half_up
from relocation_api.scoring.weights import DISPLAY_NAMES, WeightProfile

log = logging.getLogger("scoring")

RANK_LABELS = ["🥇 Best Match", "🥈 Strong Option", "🥉 Good Alternative"]


def composite_score(
    travel: ScoreBreakdown,
    health: ScoreBreakdown,
    env: ScoreBreakdown,
    weights: WeightProfile,
) -> int:
    raw = (
        travel.score * weights.travel_risk
        + health.score * weights.health_infra
        + env.score * weights.env_stability
    )
    return round_half_up(max(0.0, min(100.0, raw)))


def rank_label(rank: int) -> str:
    return RANK_LABELS[rank - 1] if rank <= len(RANK_LABELS) else f"#{rank} Option"


def rank_results(results: list[RankedResult]) -> list[RankedResult]:
    ranked = sorted(results, key=lambda r: r.composite_score, reverse=True)
    for i, r in enumerate(ranked, start=1):
        r.rank = i
        r.rank_label = rank_label(i)
    return ranked


# ── Reasoning ─────────────────────────────────────────────────────────────────

def _fmt(value: Optional[float]) -> str:
    return "N/A" if is_missing(value) else f"{value:.1f}"


def _travel_reason(travel: ScoreBreakdown, data: CountryDataSet) -> str:
    c = travel.components
    if travel.score >= 75:
        return "Strong travel safety profile: advisory risk is low and air quality is acceptable."
    if travel.score <= 40:
        issues = []
        if c["travel_advisory"] < 40:
            issues.append(f"elevated advisory risk (score: {_fmt(data.advisory.score)})")
        if c["air_quality"] < 40:
            issues.append(f"poor air quality (AQI: {_fmt(data.air_quality.aqi)})")
        if c["temperature_comfort"] < 40:
            issues.append(f"uncomfortable temperatures ({_fmt(data.weather.temp)}°C)")
        return f"Travel risk is high due to: {', '.join(issues) or 'multiple factors'}."
    concern = "travel advisories" if c["travel_advisory"] < 50 else "environmental conditions"
    return f"Moderate travel risk: some caution advised for {concern}."


def _health_reason(health: ScoreBreakdown, data: CountryDataSet) -> str:
    life = _fmt(data.health.life_expectancy)
    spend = _fmt(data.health.healthcare_expenditure)
    if health.score >= 70:
        return (f"Strong health infrastructure: life expectancy of {life} yrs "
                f"and {spend}% of GDP on healthcare.")
    if health.score <= 40:
        return (f"Health infrastructure concerns: lower investment ({spend}% GDP) "
                f"and life expectancy of {life} yrs.")
    return "Adequate health infrastructure for typical stays."


def _env_reason(env: ScoreBreakdown, data: CountryDataSet) -> Optional[str]:
    c = env.components
    if env.score >= 70:
        return "Good environmental stability: clean air and comfortable climate conditions."
    if env.score <= 40:
        if c["air_quality_stability"] < 40:
            cause = f"AQI of {_fmt(data.air_quality.aqi)}"
        elif c["humidity_comfort"] < 40:
            cause = "high humidity discomfort"
        else:
            cause = "notable weather volatility"
        return f"Environmental conditions are challenging: {cause}."
    return None


def generate_reasoning(
    data: CountryDataSet,
    travel: ScoreBreakdown,
    health: ScoreBreakdown,
    env: ScoreBreakdown,
    weights: WeightProfile,
    risk_tolerance: str,
    duration: str,
) -> list[str]:
    reasons = [_travel_reason(travel, data), _health_reason(health, data)]
    env_reason = _env_reason(env, data)
    if env_reason:
        reasons.append(env_reason)

    top_dim, top_w = weights.top()
    reasons.append(
        f"For your profile ({risk_tolerance}/{duration}), {DISPLAY_NAMES[top_dim]} "
        f"carries the highest weight ({round_half_up(top_w * 100)}%)."
    )
    return reasons


def score_country(
    data: CountryDataSet,
    weights: WeightProfile,
    risk_tolerance: str,
    duration: str,
    cache_hit: bool = False,
) -> RankedResult:
    """Score one valid country. Rank is assigned later by rank_results()."""
    travel = compute_travel_risk(data)
    health = compute_health_infrastructure(data)
    env    = compute_environmental_stability(data)
    composite = composite_score(travel, health, env, weights)

    log.info(
        f"Scored {data.country}: travel_risk={travel.score} "
        f"health_infrastructure={health.score} "
        f"environmental_stability={env.score} composite={composite}"
    )

    return RankedResult(
        country=data.country,
        data=data,
        travel_risk=travel,
        health_infrastructure=health,
        environmental_stability=env,
        composite_score=composite,
        reasoning=generate_reasoning(data, travel, health, env, weights, risk_tolerance, duration),
        cache_hit=cache_hit,
    )
