"""POST /api/resolve — percentage-or-absolute position → absolute coordinates."""

from __future__ import annotations

from fastapi import APIRouter

from layoutforge.engine.coordinates import resolve_any_position
from layoutforge.models.requests import ResolveRequest
from layoutforge.models.responses import ResolveResponse
from layoutforge.models.template import LinePosition

router = APIRouter()


@router.post("/resolve", response_model=ResolveResponse, response_model_exclude_none=True)
async def resolve(req: ResolveRequest) -> ResolveResponse:
    resolved = resolve_any_position(req.position, req.view_box)
    if isinstance(resolved, LinePosition):
        return ResolveResponse(x1=resolved.x1, y1=resolved.y1, x2=resolved.x2, y2=resolved.y2)
    return ResolveResponse(x=resolved.x, y=resolved.y)
