"""Workflow session models."""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .lifestyle import to_camel
from .projection import Prediction, ProjectionSource, RiskFactor

SessionState = Literal["collect_lifestyle", "analyzing", "show_results"]


class SessionCreateRequest(BaseModel):
    """Open a workflow session for a health snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    health_snapshot: dict[str, Any] = {}
    user_id: Optional[str] = None


class SessionResponse(BaseModel):
    """Current state of a workflow session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    user_id: str
    state: SessionState
    lifestyle: Optional[dict[str, str]] = None
    predictions: list[Prediction] = []
    risk_factors: dict[str, RiskFactor] = {}
    source: Optional[ProjectionSource] = None
    warning: Optional[str] = None
    analysis: dict[str, Any] = {}
    health_snapshot: dict[str, Any] = {}
    created_at: str
    updated_at: str
