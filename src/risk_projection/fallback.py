"""
Local Fallback Projection.

Deterministic heuristic used whenever the remote analysis service cannot
provide predictions. Seeds every projection from the snapshot's diabetes
risk score and scales it by lifestyle-derived factors.
"""

import math
from typing import Any, List, Mapping, Optional

from .lifestyle import LifestyleAnswers
from .predictions import PredictionTimeline, clamp, round_half_up, sort_by_years, to_number

DEFAULT_BASE_RISK = 50

EXERCISE_FACTORS = {"daily": 0.7, "regular": 0.85}
DEFAULT_EXERCISE_FACTOR = 1.05

DIET_FACTORS = {"excellent": 0.75, "good": 0.9}
DEFAULT_DIET_FACTOR = 1.1

STRESS_FACTORS = {"low": 0.85, "moderate": 1.0}
DEFAULT_STRESS_FACTOR = 1.2


def base_risk_from_snapshot(health_snapshot: Optional[Mapping[str, Any]]) -> float:
    """
    Read riskFactors.diabetes.score from a health snapshot.

    Any missing level, or a score that is not numeric, yields the default
    base risk of 50.
    """
    risk_factors = (health_snapshot or {}).get("riskFactors")
    diabetes = risk_factors.get("diabetes") if isinstance(risk_factors, Mapping) else None
    score = diabetes.get("score") if isinstance(diabetes, Mapping) else None
    number = to_number(score) if score is not None else None
    return DEFAULT_BASE_RISK if number is None else number


def exercise_factor(exercise: str) -> float:
    return EXERCISE_FACTORS.get(exercise, DEFAULT_EXERCISE_FACTOR)


def diet_factor(diet: str) -> float:
    return DIET_FACTORS.get(diet, DEFAULT_DIET_FACTOR)


def stress_factor(stress: str) -> float:
    return STRESS_FACTORS.get(stress, DEFAULT_STRESS_FACTOR)


def _scaled(value: float, low: int, high: int) -> int:
    # Products of very large seeds overflow to inf
    if math.isnan(value):
        return low
    if math.isinf(value):
        return high if value > 0 else low
    return clamp(round_half_up(value), low, high)


def generate_fallback_predictions(
    lifestyle: LifestyleAnswers,
    health_snapshot: Optional[Mapping[str, Any]],
) -> List[PredictionTimeline]:
    """
    Produce the three fixed-condition projections from local data only.

    Args:
        lifestyle: Completed lifestyle answers
        health_snapshot: Prior health record; only the diabetes score is read

    Returns:
        Diabetes, cardiovascular and kidney projections sorted by years
    """
    base_risk = base_risk_from_snapshot(health_snapshot)

    predictions = [
        PredictionTimeline(
            years=3,
            condition="Type 2 Diabetes",
            probability=_scaled(
                base_risk * exercise_factor(lifestyle.exercise) * diet_factor(lifestyle.diet),
                4,
                95,
            ),
            preventable=True,
            interventions=["Improve diet", "Walk 30 min/day", "Weight loss"],
            rationale=(
                "Current metabolic markers combined with lifestyle indicate "
                "medium-term diabetes risk."
            ),
        ),
        PredictionTimeline(
            years=6,
            condition="Cardiovascular Disease",
            probability=_scaled(base_risk * 0.9 * stress_factor(lifestyle.stress), 8, 95),
            preventable=True,
            interventions=["150 min/wk cardio", "Reduce sodium", "Mindfulness"],
            rationale="Cardiometabolic profile and stress levels drive cardiovascular risk.",
        ),
        PredictionTimeline(
            years=10,
            condition="Chronic Kidney Disease",
            probability=_scaled(base_risk * 0.55, 3, 70),
            preventable=True,
            interventions=["BP control", "Kidney tests", "Glycemic control"],
            rationale="Long-term exposure to diabetes/hypertension increases kidney risk.",
        ),
    ]

    return sort_by_years(predictions)
