"""POST /api/centroid — confidence-scored visual center of icon markup or raw paths."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from layoutforge.dependencies import get_render_config
from layoutforge.engine.centroid import (
    bounds_confidence,
    compute_centroid,
    compute_path_centroid,
    path_content_bounds,
)
from layoutforge.engine.config import RenderConfig
from layoutforge.engine.context import Point
from layoutforge.models.requests import CentroidRequest
from layoutforge.models.responses import CentroidResponse, PointModel
from layoutforge.svg.markup import extract_view_box

router = APIRouter()


def _point(p: Point) -> PointModel:
    return PointModel(x=p.x, y=p.y)


@router.post("/centroid", response_model=CentroidResponse)
async def centroid(req: CentroidRequest, config: RenderConfig = Depends(get_render_config)) -> CentroidResponse:
    fit = None
    if req.svg:
        result = compute_centroid(req.svg, config)
        fit = bounds_confidence(path_content_bounds(req.svg), extract_view_box(req.svg))
    else:
        result = compute_path_centroid(req.paths, polygon=req.polygon, config=config)

    return CentroidResponse(
        bounding_box_center=_point(result.bounding_box_center),
        centroid_center=_point(result.centroid_center),
        use_centroid=result.use_centroid,
        shape_kind=result.shape_kind,
        confidence=result.confidence,
        transform_origin=_point(result.preferred_center(config.centroid_confidence_threshold)),
        bounds_confidence=fit,
    )
