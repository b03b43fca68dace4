"""Lifestyle questionnaire API routes."""
from fastapi import APIRouter

from risk_projection import LIFESTYLE_OPTIONS
from risk_projection.lifestyle import WIRE_KEYS

from ..models.lifestyle import LifestyleOption, LifestyleQuestion

router = APIRouter(prefix="/api/lifestyle", tags=["Lifestyle"])


@router.get("/options", response_model=list[LifestyleQuestion])
async def get_lifestyle_options():
    """List the lifestyle questions and their allowed answer codes."""
    return [
        LifestyleQuestion(
            field=name,
            wire_key=WIRE_KEYS[name],
            options=[LifestyleOption(code=code, label=label) for code, label in options],
        )
        for name, options in LIFESTYLE_OPTIONS.items()
    ]
