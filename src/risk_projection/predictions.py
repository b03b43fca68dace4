"""
Prediction Timeline Records.

Canonical shape of one projected condition and the normalization that turns
loosely shaped remote records into it.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)

UNKNOWN_CONDITION = "Unknown"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def to_number(value: Any) -> Optional[float]:
    """Coerce a JSON scalar to a finite float, or None when it is not numeric."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not null."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


@dataclass
class PredictionTimeline:
    """A condition projected to occur within a number of years."""

    years: int
    condition: str
    probability: int  # percent, 0-100
    preventable: bool = False
    interventions: List[str] = field(default_factory=list)
    rationale: str = ""
    citations: List[str] = field(default_factory=list)
    trend: Optional[str] = None

    def __post_init__(self):
        self.years = max(0, int(self.years))
        self.probability = clamp(int(self.probability), 0, 100)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "years": self.years,
            "condition": self.condition,
            "probability": self.probability,
            "preventable": self.preventable,
            "interventions": list(self.interventions),
            "rationale": self.rationale,
            "citations": list(self.citations),
        }
        if self.trend is not None:
            result["trend"] = self.trend
        return result


def normalize_prediction(raw: Mapping[str, Any]) -> PredictionTimeline:
    """
    Normalize a remote prediction record into a PredictionTimeline.

    Accepts the field aliases used by different model versions:
    years/y, condition/name and probability_pct/probability/prob.
    Every field falls back to a type-correct default.

    Args:
        raw: One prediction record from the analysis payload

    Returns:
        Fully populated PredictionTimeline
    """
    years = to_number(_first_present(raw, "years", "y"))
    probability = to_number(_first_present(raw, "probability_pct", "probability", "prob"))
    condition = _first_present(raw, "condition", "name")
    rationale = raw.get("rationale")
    trend = raw.get("trend")

    return PredictionTimeline(
        years=max(0, round_half_up(years)) if years is not None else 0,
        condition=str(condition) if condition is not None else UNKNOWN_CONDITION,
        probability=clamp(round_half_up(probability), 0, 100) if probability is not None else 0,
        preventable=bool(raw.get("preventable")),
        interventions=_string_list(raw.get("interventions")),
        rationale=str(rationale) if rationale is not None else "",
        citations=_string_list(raw.get("citations")),
        trend=str(trend) if trend is not None else None,
    )


def normalize_predictions(records: List[Any]) -> List[PredictionTimeline]:
    """Normalize a list of raw records, skipping entries that are not objects."""
    normalized = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.debug(f"[RESOLVER] Skipping unusable prediction record: {record!r}")
            continue
        normalized.append(normalize_prediction(record))
    return normalized


def sort_by_years(predictions: List[PredictionTimeline]) -> List[PredictionTimeline]:
    """Order predictions by projection horizon, keeping ties in input order."""
    return sorted(predictions, key=lambda p: p.years)
