"""Shared projection components built from application settings."""
from functools import lru_cache

from risk_projection import AnalysisClient, ProjectionWorkflow, RiskProjectionResolver

from ..config import get_settings
from .session_store import SessionStore


@lru_cache
def get_analysis_client() -> AnalysisClient:
    settings = get_settings()
    return AnalysisClient(
        base_url=settings.analysis_api_url,
        token=settings.analysis_api_token,
        timeout=settings.analysis_timeout_seconds,
        health_databases=settings.health_databases,
    )


@lru_cache
def get_resolver() -> RiskProjectionResolver:
    # Slightly longer than the HTTP timeout so the client reports its own timeouts
    return RiskProjectionResolver(timeout=get_settings().analysis_timeout_seconds + 5)


@lru_cache
def get_workflow() -> ProjectionWorkflow:
    return ProjectionWorkflow(resolver=get_resolver(), remote_call=get_analysis_client())


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore(max_sessions=get_settings().max_sessions)
