"""API route modules."""
from .lifestyle import router as lifestyle_router
from .projections import router as projections_router
from .sessions import router as sessions_router

__all__ = [
    "lifestyle_router",
    "projections_router",
    "sessions_router",
]
