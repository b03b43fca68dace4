"""
Risk Projection Module.

Projects future comorbidity risk from lifestyle answers and a health
snapshot, preferring a remote analysis service and falling back to a local
heuristic.
"""

from .analysis_client import (
    AnalysisClient,
    RemoteAnalysisFailure,
    RemoteAnalysisSuccess,
    parse_analysis_response,
)
from .display import probability_band
from .fallback import generate_fallback_predictions
from .lifestyle import (
    LIFESTYLE_OPTIONS,
    LifestyleAnswers,
    LifestyleValidationError,
)
from .predictions import PredictionTimeline, normalize_prediction
from .resolver import (
    FALLBACK_WARNING,
    ProjectionOutcome,
    RiskProjectionResolver,
    resolve,
)
from .risk_factors import derive_risk_factors, merge_risk_factors
from .workflow import (
    ProjectionWorkflow,
    WorkflowContext,
    WorkflowState,
    WorkflowStateError,
    derive_user_id,
    merged_snapshot,
)

__all__ = [
    "AnalysisClient",
    "RemoteAnalysisFailure",
    "RemoteAnalysisSuccess",
    "parse_analysis_response",
    "probability_band",
    "generate_fallback_predictions",
    "LIFESTYLE_OPTIONS",
    "LifestyleAnswers",
    "LifestyleValidationError",
    "PredictionTimeline",
    "normalize_prediction",
    "FALLBACK_WARNING",
    "ProjectionOutcome",
    "RiskProjectionResolver",
    "resolve",
    "derive_risk_factors",
    "merge_risk_factors",
    "ProjectionWorkflow",
    "WorkflowContext",
    "WorkflowState",
    "WorkflowStateError",
    "derive_user_id",
    "merged_snapshot",
]
