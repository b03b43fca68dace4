"""Projection request and response models."""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from risk_projection import PredictionTimeline, probability_band

from .lifestyle import LifestyleInput, to_camel

RiskLevel = Literal["Low", "Medium", "High"]
ProjectionSource = Literal["remote", "fallback"]


class Prediction(BaseModel):
    """A projected condition with its display band."""

    years: int = Field(ge=0)
    condition: str
    probability: int = Field(ge=0, le=100)
    preventable: bool
    interventions: list[str] = []
    rationale: str = ""
    citations: list[str] = []
    trend: Optional[str] = None
    band: Literal["low", "moderate", "high"]

    @classmethod
    def from_timeline(cls, prediction: PredictionTimeline) -> "Prediction":
        return cls(**prediction.to_dict(), band=probability_band(prediction.probability))


class RiskFactor(BaseModel):
    """Risk factor entry derived from a projection."""

    risk: RiskLevel
    score: int = Field(ge=0, le=100)
    trend: str
    rationale: str
    interventions: list[str]
    citations: list[str]


class ProjectionRequest(BaseModel):
    """Stateless projection request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    lifestyle: LifestyleInput
    health_snapshot: dict[str, Any] = {}


class ProjectionResponse(BaseModel):
    """Projection result for one request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    source: ProjectionSource
    warning: Optional[str] = None
    predictions: list[Prediction]
    risk_factors: dict[str, RiskFactor]
    analysis: dict[str, Any] = {}


class RiskFactorsRequest(BaseModel):
    """Predictions to fold into risk factors, optionally over a baseline."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    predictions: list[dict[str, Any]]
    baseline: Optional[dict[str, Any]] = None


class RiskFactorsResponse(BaseModel):
    """Derived (and merged, when a baseline was given) risk factors."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_factors: dict[str, Any]
