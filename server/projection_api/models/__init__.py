"""Pydantic models for projection API requests and responses."""
from .lifestyle import LifestyleInput, LifestyleOption, LifestyleQuestion
from .projection import (
    Prediction,
    ProjectionRequest,
    ProjectionResponse,
    RiskFactor,
    RiskFactorsRequest,
    RiskFactorsResponse,
)
from .session import SessionCreateRequest, SessionResponse

__all__ = [
    "LifestyleInput",
    "LifestyleOption",
    "LifestyleQuestion",
    "Prediction",
    "ProjectionRequest",
    "ProjectionResponse",
    "RiskFactor",
    "RiskFactorsRequest",
    "RiskFactorsResponse",
    "SessionCreateRequest",
    "SessionResponse",
]
