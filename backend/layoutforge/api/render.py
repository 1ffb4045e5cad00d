"""POST /api/render — template + overrides → SVG document."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from layoutforge.dependencies import get_render_config
from layoutforge.engine.assembler import render_document
from layoutforge.engine.config import RenderConfig
from layoutforge.models.requests import RenderRequest
from layoutforge.models.responses import RenderResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render")

SVG_MEDIA_TYPE = "image/svg+xml"


def _render(req: RenderRequest, config: RenderConfig) -> str:
    return render_document(req.template, req.overrides, config=config, font_imports=req.font_imports)


@router.post("", response_class=Response)
async def render_svg(req: RenderRequest, config: RenderConfig = Depends(get_render_config)) -> Response:
    return Response(content=_render(req, config), media_type=SVG_MEDIA_TYPE)


@router.post("/json", response_model=RenderResponse)
async def render_json(req: RenderRequest, config: RenderConfig = Depends(get_render_config)) -> RenderResponse:
    start = time.perf_counter()
    svg = _render(req, config)
    elapsed = (time.perf_counter() - start) * 1000

    logger.info("Rendered %d layers in %.1fms", len(req.template.layers), elapsed)
    return RenderResponse(
        svg=svg,
        layer_count=svg.count("<g data-layer="),
        processing_time_ms=round(elapsed, 1),
    )
