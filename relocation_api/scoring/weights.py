"""
relocation_api/scoring/weights.py
Dynamic weight profile for the composite score.

  base                 travel 0.40 | health 0.35 | environment 0.25
  risk tolerance
    low                +0.10       | −0.10       | +0.05
    high               −0.10       | −0.05       | +0.10
    moderate           unchanged
  → renormalize
  duration
    long               −0.05       | +0.10       | −0.05
    short               0          | −0.08       | +0.08
  → renormalize

Values stay unrounded internally; WeightProfile.rounded() is for reporting.
"""

from dataclasses import dataclass
from enum import Enum

from relocation_api.core.config import VALID_DURATION, VALID_RISK


class Dimension(str, Enum):
    TRAVEL_RISK   = "travel_risk_score"
    HEALTH_INFRA  = "health_infrastructure_score"
    ENV_STABILITY = "environmental_stability_score"


DISPLAY_NAMES: dict[Dimension, str] = {
    Dimension.TRAVEL_RISK:   "Travel Safety",
    Dimension.HEALTH_INFRA:  "Health Infrastructure",
    Dimension.ENV_STABILITY: "Environmental Stability",
}

BASE_WEIGHTS = (0.40, 0.35, 0.25)

# (travel, health, environment) deltas
RISK_ADJUSTMENTS: dict[str, tuple[float, float, float]] = {
    "low":      (+0.10, -0.10, +0.05),
    "moderate": (0.0, 0.0, 0.0),
    "high":     (-0.10, -0.05, +0.10),
}
DURATION_ADJUSTMENTS: dict[str, tuple[float, float, float]] = {
    "long":  (-0.05, +0.10, -0.05),
    "short": (0.0, -0.08, +0.08),
}


@dataclass(frozen=True)
class WeightProfile:
    travel_risk:   float
    health_infra:  float
    env_stability: float

    def as_dict(self) -> dict[Dimension, float]:
        return {
            Dimension.TRAVEL_RISK:   self.travel_risk,
            Dimension.HEALTH_INFRA:  self.health_infra,
            Dimension.ENV_STABILITY: self.env_stability,
        }

    def rounded(self) -> dict[str, float]:
        return {dim.value: round(w, 3) for dim, w in self.as_dict().items()}

    def top(self) -> tuple[Dimension, float]:
        """Heaviest dimension; the earlier dimension wins a tie."""
        return max(self.as_dict().items(), key=lambda kv: kv[1])


def _apply(weights: tuple[float, float, float], delta: tuple[float, float, float]):
    adjusted = [w + d for w, d in zip(weights, delta)]
    total = sum(adjusted)
    return tuple(w / total for w in adjusted)


def resolve_weights(risk_tolerance: str, duration: str) -> WeightProfile:
    rt = risk_tolerance.strip().lower()
    d  = duration.strip().lower()
    if rt not in VALID_RISK:
        raise ValueError(f"riskTolerance must be one of {VALID_RISK}, got {risk_tolerance!r}")
    if d not in VALID_DURATION:
        raise ValueError(f"duration must be one of {VALID_DURATION}, got {duration!r}")

    weights = BASE_WEIGHTS
    if rt != "moderate":
        weights = _apply(weights, RISK_ADJUSTMENTS[rt])
    weights = _apply(weights, DURATION_ADJUSTMENTS[d])
    return WeightProfile(*weights)
