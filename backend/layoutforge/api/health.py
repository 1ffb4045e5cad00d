"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from layoutforge.config import Settings
from layoutforge.dependencies import get_settings
from layoutforge.models.responses import HealthResponse
from layoutforge.models.template import KNOWN_SHAPE_SUBTYPES

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        environment=settings.layoutforge_env,
        shape_subtypes=list(KNOWN_SHAPE_SUBTYPES),
        font_imports=settings.embed_font_imports,
    )
