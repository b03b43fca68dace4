"""Risk Projection API - FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routes import lifestyle, projections, sessions

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Risk Projection API",
    description="Comorbidity risk projections with a local fallback heuristic",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(lifestyle.router)
app.include_router(projections.router)
app.include_router(sessions.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "projection-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.projection_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
