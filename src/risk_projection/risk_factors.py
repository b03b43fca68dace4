"""
Risk Factor Derivation.

Folds a list of projections into the slug-keyed risk-factor mapping used by
the dashboard, so projected conditions can sit next to baseline risks.
"""

import re
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .predictions import PredictionTimeline, clamp, normalize_prediction, round_half_up

HIGH_RISK_SCORE = 70
MEDIUM_RISK_SCORE = 40
DEFAULT_TREND = "Stable"

_WHITESPACE = re.compile(r"\s+")

PredictionLike = Union[PredictionTimeline, Mapping[str, Any]]


def condition_slug(condition: str) -> str:
    """'Type 2 Diabetes' -> 'type_2_diabetes'."""
    return _WHITESPACE.sub("_", condition.lower())


def risk_label(score: int) -> str:
    """Risk label for a projected score (High >= 70, Medium >= 40)."""
    if score >= HIGH_RISK_SCORE:
        return "High"
    if score >= MEDIUM_RISK_SCORE:
        return "Medium"
    return "Low"


def _as_prediction(prediction: PredictionLike) -> PredictionTimeline:
    if isinstance(prediction, PredictionTimeline):
        return prediction
    return normalize_prediction(prediction)


def derive_risk_factors(predictions: Iterable[PredictionLike]) -> Dict[str, dict]:
    """
    Build a risk-factor summary from projections.

    Later predictions for the same condition replace earlier ones.

    Args:
        predictions: PredictionTimeline objects or raw prediction records

    Returns:
        Mapping of condition slug to risk, score, trend, rationale,
        interventions and citations
    """
    summary: Dict[str, dict] = {}
    for item in predictions:
        prediction = _as_prediction(item)
        score = clamp(round_half_up(prediction.probability), 0, 100)
        summary[condition_slug(prediction.condition)] = {
            "risk": risk_label(score),
            "score": score,
            "trend": prediction.trend or DEFAULT_TREND,
            "rationale": prediction.rationale,
            "interventions": list(prediction.interventions),
            "citations": list(prediction.citations),
        }
    return summary


def merge_risk_factors(
    baseline: Optional[Mapping[str, Any]],
    predictions: Iterable[PredictionLike],
) -> Dict[str, Any]:
    """Overlay derived risk factors on a snapshot's baseline risk factors."""
    merged = dict(baseline or {})
    merged.update(derive_risk_factors(predictions))
    return merged
