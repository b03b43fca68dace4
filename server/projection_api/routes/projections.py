"""Stateless projection API routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from risk_projection import (
    AnalysisClient,
    LifestyleAnswers,
    LifestyleValidationError,
    RiskProjectionResolver,
    derive_risk_factors,
    derive_user_id,
    generate_fallback_predictions,
    merge_risk_factors,
)

from ..models.lifestyle import LifestyleInput
from ..models.projection import (
    Prediction,
    ProjectionRequest,
    ProjectionResponse,
    RiskFactorsRequest,
    RiskFactorsResponse,
)
from ..services.projection_service import get_analysis_client, get_resolver

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Projections"])


def validated_answers(lifestyle: LifestyleInput) -> LifestyleAnswers:
    """Convert submitted answers, raising 422 when any are missing or unknown."""
    answers = lifestyle.to_answers()
    try:
        return answers.validate()
    except LifestyleValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing": e.missing, "invalid": e.invalid},
        )


@router.post("/projections", response_model=ProjectionResponse)
async def create_projection(
    request: ProjectionRequest,
    resolver: RiskProjectionResolver = Depends(get_resolver),
    client: AnalysisClient = Depends(get_analysis_client),
):
    """
    Project comorbidity risk for a lifestyle and health snapshot.

    Tries the remote analysis service once. When it fails the response
    still succeeds, with source "fallback" and a warning message.
    """
    answers = validated_answers(request.lifestyle)
    user_id = request.user_id or derive_user_id(request.health_snapshot)

    outcome = await resolver.resolve_detailed(
        answers, request.health_snapshot, client, user_id=user_id
    )
    log.info(f"Projection for {user_id}: {len(outcome.predictions)} predictions via {outcome.source}")

    return ProjectionResponse(
        user_id=user_id,
        source=outcome.source,
        warning=outcome.warning,
        predictions=[Prediction.from_timeline(p) for p in outcome.predictions],
        risk_factors=derive_risk_factors(outcome.predictions),
        analysis=outcome.analysis,
    )


@router.post("/projections/fallback", response_model=ProjectionResponse)
async def create_fallback_projection(request: ProjectionRequest):
    """Project risk with the local heuristic only, without calling the remote service."""
    answers = validated_answers(request.lifestyle)
    user_id = request.user_id or derive_user_id(request.health_snapshot)
    predictions = generate_fallback_predictions(answers, request.health_snapshot)

    return ProjectionResponse(
        user_id=user_id,
        source="fallback",
        predictions=[Prediction.from_timeline(p) for p in predictions],
        risk_factors=derive_risk_factors(predictions),
    )


@router.post("/risk-factors", response_model=RiskFactorsResponse)
async def create_risk_factors(request: RiskFactorsRequest):
    """
    Derive risk factors from prediction records.

    When a baseline is supplied, derived entries are merged over it.
    """
    if request.baseline is None:
        risk_factors = derive_risk_factors(request.predictions)
    else:
        risk_factors = merge_risk_factors(request.baseline, request.predictions)
    return RiskFactorsResponse(risk_factors=risk_factors)
