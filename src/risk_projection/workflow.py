"""
Projection Workflow.

Explicit state machine for one user's projection flow:

    collect_lifestyle -> analyzing -> show_results

All state for a flow lives on a WorkflowContext that the caller owns and
passes in, so nothing is kept in ambient storage between steps.
"""

import copy
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .lifestyle import LifestyleAnswers
from .predictions import PredictionTimeline
from .resolver import SOURCE_REMOTE, RemoteCall, RiskProjectionResolver
from .risk_factors import derive_risk_factors, merge_risk_factors

logger = logging.getLogger(__name__)

GUEST_USER_ID = "guest"


class WorkflowState(str, Enum):
    """Steps of the projection flow."""

    COLLECT_LIFESTYLE = "collect_lifestyle"
    ANALYZING = "analyzing"
    SHOW_RESULTS = "show_results"


class WorkflowStateError(RuntimeError):
    """Raised when a step is requested from a state that does not allow it."""


def derive_user_id(health_snapshot: Optional[Mapping[str, Any]]) -> str:
    """
    Pick the identifier the analysis service keys a user by.

    Prefers the ABHA address, then the ABHA number, then the lowercased
    name with whitespace removed.
    """
    profile = (health_snapshot or {}).get("profile")
    if not isinstance(profile, Mapping):
        return GUEST_USER_ID
    for key in ("healthId", "healthIdNumber"):
        if profile.get(key):
            return str(profile[key])
    name = profile.get("name")
    if name:
        return re.sub(r"\s+", "", str(name).lower()) or GUEST_USER_ID
    return GUEST_USER_ID


@dataclass
class WorkflowContext:
    """Everything one projection flow knows about its user."""

    health_snapshot: Dict[str, Any]
    user_id: str = ""
    state: WorkflowState = WorkflowState.COLLECT_LIFESTYLE
    lifestyle: Optional[LifestyleAnswers] = None
    predictions: List[PredictionTimeline] = field(default_factory=list)
    risk_factors: Dict[str, dict] = field(default_factory=dict)
    source: Optional[str] = None
    warning: Optional[str] = None
    analysis: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not self.user_id:
            self.user_id = derive_user_id(self.health_snapshot)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "user_id": self.user_id,
            "state": self.state.value,
            "lifestyle": self.lifestyle.to_dict() if self.lifestyle else None,
            "predictions": [p.to_dict() for p in self.predictions],
            "risk_factors": self.risk_factors,
            "source": self.source,
            "warning": self.warning,
            "analysis": self.analysis,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class ProjectionWorkflow:
    """Drives WorkflowContext objects through the projection steps."""

    def __init__(
        self,
        resolver: Optional[RiskProjectionResolver] = None,
        remote_call: Optional[RemoteCall] = None,
    ):
        self.resolver = resolver or RiskProjectionResolver()
        self.remote_call = remote_call

    def _transition(self, context: WorkflowContext, state: WorkflowState) -> None:
        logger.debug(f"[WORKFLOW] {context.user_id}: {context.state.value} -> {state.value}")
        context.state = state
        context.updated_at = datetime.now(timezone.utc)

    async def submit(self, context: WorkflowContext, lifestyle: LifestyleAnswers) -> WorkflowContext:
        """
        Submit lifestyle answers and run the projection.

        Args:
            context: The flow to advance
            lifestyle: Answers to all eight questions

        Returns:
            The same context, now in show_results

        Raises:
            WorkflowStateError: If an analysis is already running for the context
            LifestyleValidationError: If the answers are incomplete or invalid
        """
        if context.state == WorkflowState.ANALYZING:
            raise WorkflowStateError("An analysis is already in progress for this session")

        lifestyle.validate()

        context.lifestyle = lifestyle
        self._transition(context, WorkflowState.ANALYZING)
        try:
            outcome = await self.resolver.resolve_detailed(
                lifestyle,
                context.health_snapshot,
                self.remote_call,
                user_id=context.user_id,
            )
        except BaseException:
            self._clear_results(context)
            self._transition(context, WorkflowState.COLLECT_LIFESTYLE)
            raise

        context.predictions = outcome.predictions
        context.risk_factors = derive_risk_factors(outcome.predictions)
        context.source = outcome.source
        context.warning = outcome.warning
        context.analysis = outcome.analysis
        self._transition(context, WorkflowState.SHOW_RESULTS)

        logger.info(
            f"[WORKFLOW] {context.user_id}: {len(outcome.predictions)} predictions "
            f"from {outcome.source}"
        )
        return context

    @staticmethod
    def _clear_results(context: WorkflowContext) -> None:
        context.lifestyle = None
        context.predictions = []
        context.risk_factors = {}
        context.source = None
        context.warning = None
        context.analysis = {}

    def reset(self, context: WorkflowContext) -> WorkflowContext:
        """Return a finished flow to lifestyle collection, clearing results."""
        if context.state == WorkflowState.ANALYZING:
            raise WorkflowStateError("Cannot reset while an analysis is in progress")
        self._clear_results(context)
        self._transition(context, WorkflowState.COLLECT_LIFESTYLE)
        return context


def merged_snapshot(context: WorkflowContext) -> Dict[str, Any]:
    """
    Copy of the context's snapshot updated with its projection results.

    riskFactors gains the derived entries; a remote analysis is attached
    under "analysis".
    """
    snapshot = copy.deepcopy(context.health_snapshot)
    if context.state != WorkflowState.SHOW_RESULTS:
        return snapshot
    snapshot["riskFactors"] = merge_risk_factors(
        snapshot.get("riskFactors") if isinstance(snapshot.get("riskFactors"), Mapping) else None,
        context.predictions,
    )
    if context.source == SOURCE_REMOTE and context.analysis:
        snapshot["analysis"] = copy.deepcopy(context.analysis)
    return snapshot
