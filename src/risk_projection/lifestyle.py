"""
Lifestyle Questionnaire Answers.

Holds the eight categorical answers collected before a projection can run,
along with the allowed answer codes for each question. Answers are kept as
plain string codes; the empty string marks a question the user has not
answered yet.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Tuple

UNSET = ""

# (code, label) pairs per question, in display order
LIFESTYLE_OPTIONS: Dict[str, List[Tuple[str, str]]] = {
    "exercise": [
        ("none", "None"),
        ("rare", "1-2/mo"),
        ("moderate", "1-2/wk"),
        ("regular", "3-4/wk"),
        ("daily", "Daily"),
    ],
    "diet": [
        ("poor", "Mostly processed"),
        ("average", "Average"),
        ("good", "Balanced"),
        ("excellent", "Excellent"),
    ],
    "sleep": [
        ("less5", "<5h"),
        ("5-6", "5-6h"),
        ("6-7", "6-7h"),
        ("7-8", "7-8h"),
        ("more8", ">8h"),
    ],
    "stress": [
        ("low", "Low"),
        ("moderate", "Moderate"),
        ("high", "High"),
        ("chronic", "Chronic"),
    ],
    "smoking": [
        ("never", "Never"),
        ("former", "Former"),
        ("occasional", "Occasional"),
        ("yes", "Regular"),
    ],
    "alcohol": [
        ("none", "None"),
        ("occasional", "Occasional"),
        ("moderate", "1-2/wk"),
        ("regular", "3-5/wk"),
        ("heavy", "Daily"),
    ],
    "water_intake": [
        ("less1L", "<1L"),
        ("1-2L", "1-2L"),
        ("2-3L", "2-3L"),
        ("more3L", ">3L"),
    ],
    "screen_time": [
        ("less2", "<2h"),
        ("2-4", "2-4h"),
        ("4-8", "4-8h"),
        ("more8", ">8h"),
    ],
}

# snake_case attribute -> camelCase wire key
WIRE_KEYS = {
    "exercise": "exercise",
    "diet": "diet",
    "sleep": "sleep",
    "stress": "stress",
    "smoking": "smoking",
    "alcohol": "alcohol",
    "water_intake": "waterIntake",
    "screen_time": "screenTime",
}

INCOMPLETE_MESSAGE = (
    "Please complete all lifestyle fields to get an accurate projection."
)


class LifestyleValidationError(ValueError):
    """Raised when lifestyle answers are incomplete or use unknown codes."""

    def __init__(self, missing: List[str], invalid: List[str]):
        self.missing = missing
        self.invalid = invalid
        if missing:
            message = INCOMPLETE_MESSAGE
        else:
            message = f"Unknown lifestyle answer codes for: {', '.join(invalid)}"
        super().__init__(message)


@dataclass(frozen=True)
class LifestyleAnswers:
    """Answers to the eight lifestyle questions."""

    exercise: str = UNSET
    diet: str = UNSET
    sleep: str = UNSET
    stress: str = UNSET
    smoking: str = UNSET
    alcohol: str = UNSET
    water_intake: str = UNSET
    screen_time: str = UNSET

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LifestyleAnswers":
        """
        Build answers from a mapping using either wire keys (waterIntake)
        or attribute names (water_intake). Missing or null keys stay unset.
        """
        values = {}
        for name, wire_key in WIRE_KEYS.items():
            value = data.get(wire_key)
            if value is None:
                value = data.get(name)
            values[name] = UNSET if value is None else str(value).strip()
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Convert to the camelCase wire shape sent to the analysis service."""
        return {WIRE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    def missing_fields(self) -> List[str]:
        """Names of questions that are still unset."""
        return [f.name for f in fields(self) if getattr(self, f.name) == UNSET]

    def invalid_fields(self) -> List[str]:
        """Names of answered questions whose code is not a known option."""
        invalid = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value == UNSET:
                continue
            if value not in {code for code, _ in LIFESTYLE_OPTIONS[f.name]}:
                invalid.append(f.name)
        return invalid

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def validate(self) -> "LifestyleAnswers":
        """
        Check that every question is answered with a known code.

        Returns:
            self, so calls can be chained.

        Raises:
            LifestyleValidationError: listing missing and invalid fields.
        """
        missing = self.missing_fields()
        invalid = self.invalid_fields()
        if missing or invalid:
            raise LifestyleValidationError(missing=missing, invalid=invalid)
        return self
