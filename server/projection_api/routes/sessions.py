"""Projection workflow session API routes.

A session walks one user through collect_lifestyle -> analyzing ->
show_results, keeping the health snapshot and results server-side.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from risk_projection import (
    ProjectionWorkflow,
    WorkflowStateError,
    merged_snapshot,
)

from ..models.lifestyle import LifestyleInput
from ..models.projection import Prediction
from ..models.session import SessionCreateRequest, SessionResponse
from ..services.projection_service import get_session_store, get_workflow
from ..services.session_store import ProjectionSession, SessionStore
from .projections import validated_answers

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


def _to_response(session: ProjectionSession) -> SessionResponse:
    """Convert a stored session to its API representation."""
    context = session.context
    return SessionResponse(
        session_id=session.id,
        user_id=context.user_id,
        state=context.state.value,
        lifestyle=context.lifestyle.to_dict() if context.lifestyle else None,
        predictions=[Prediction.from_timeline(p) for p in context.predictions],
        risk_factors=context.risk_factors,
        source=context.source,
        warning=context.warning,
        analysis=context.analysis,
        health_snapshot=merged_snapshot(context),
        created_at=context.created_at.isoformat(),
        updated_at=context.updated_at.isoformat(),
    )


def _get_session(store: SessionStore, session_id: str) -> ProjectionSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


@router.get("/stats")
async def get_session_stats(store: SessionStore = Depends(get_session_store)):
    """Session store statistics."""
    return store.get_stats()


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    request: SessionCreateRequest,
    store: SessionStore = Depends(get_session_store),
):
    """Open a session for a verified user's health snapshot."""
    session = store.create(request.health_snapshot, user_id=request.user_id)
    return _to_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Get a session's current state and results."""
    return _to_response(_get_session(store, session_id))


@router.post("/{session_id}/lifestyle", response_model=SessionResponse)
async def submit_lifestyle(
    session_id: str,
    lifestyle: LifestyleInput,
    store: SessionStore = Depends(get_session_store),
    workflow: ProjectionWorkflow = Depends(get_workflow),
):
    """
    Submit lifestyle answers and run the projection.

    Returns 409 while a previous submission for the session is still
    being analyzed.
    """
    session = _get_session(store, session_id)
    answers = validated_answers(lifestyle)

    try:
        await workflow.submit(session.context, answers)
    except WorkflowStateError as e:
        log.warning(f"[SESSIONS] Rejected submission for {session_id}: {e}")
        raise HTTPException(status_code=409, detail=str(e))

    log.info(f"[SESSIONS] Session {session_id} analyzed via {session.context.source}")
    store.record_analysis(used_fallback=session.context.source == "fallback")
    return _to_response(session)


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    workflow: ProjectionWorkflow = Depends(get_workflow),
):
    """Return a session to lifestyle collection."""
    session = _get_session(store, session_id)
    try:
        workflow.reset(session.context)
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _to_response(session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Drop a session."""
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
