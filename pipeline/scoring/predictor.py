"""
What-if AQI predictor.

A closed-form weighted sum over ten synthetic environmental variables, not
a trained model. The result is clamped to [0, 500] and rounded half-up to
an integer.

time_of_day and season are part of the input but carry no weight.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Tuple

from pipeline.aggregation.stats import round_half_up

BASE_AQI = 50
AQI_MIN = 0
AQI_MAX = 500

# Declared (min, max) per variable, inclusive
VARIABLE_BOUNDS: Dict[str, Tuple[int, int]] = {
    "temperature":           (0, 45),    # °C
    "humidity":              (0, 100),   # %
    "wind_speed":            (0, 20),    # m/s
    "traffic_index":         (0, 100),
    "industrial_score":      (0, 100),
    "construction_activity": (0, 100),
    "green_cover":           (0, 100),   # %
    "population_density":    (0, 100),
    "time_of_day":           (0, 23),    # hour
    "season":                (0, 3),
}


@dataclass(frozen=True)
class ScoringInput:
    """Ten-variable input vector for predict(). Built per request, never stored."""
    temperature: float = 25
    humidity: float = 60
    wind_speed: float = 5
    traffic_index: float = 50
    industrial_score: float = 40
    construction_activity: float = 30
    green_cover: float = 25
    population_density: float = 50
    time_of_day: float = 12
    season: int = 1

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_INPUT = ScoringInput()


def factor_breakdown(v: ScoringInput) -> Dict[str, float]:
    """Per-variable contributions in summation order (base first)."""
    return {
        "base":                  BASE_AQI,
        "temperature":           (v.temperature - 25) * 2,
        "humidity":              (70 - v.humidity) * 0.5,
        "wind_speed":            (10 - v.wind_speed) * 3,
        "traffic_index":         v.traffic_index * 0.8,
        "industrial_score":      v.industrial_score * 1.2,
        "construction_activity": v.construction_activity * 0.6,
        "green_cover":           (50 - v.green_cover) * 0.8,
        "population_density":    v.population_density * 0.4,
    }


def raw_score(v: ScoringInput) -> float:
    """Unclamped, unrounded weighted sum."""
    score = 0.0
    # Left-to-right accumulation keeps float results identical across runtimes
    for contribution in factor_breakdown(v).values():
        score += contribution
    return score


def predict(v: ScoringInput) -> int:
    """
    Predict an integer AQI in [0, 500] for the given input.

    Out-of-range variables are not rejected; only the final score is
    clamped.

    Example:
        >>> predict(ScoringInput())
        216
    """
    clamped = max(AQI_MIN, min(AQI_MAX, raw_score(v)))
    return round_half_up(clamped)
