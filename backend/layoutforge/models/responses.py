"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    environment: str = "development"
    shape_subtypes: list[str] = Field(default_factory=list)
    font_imports: bool = True


class RenderResponse(BaseModel):
    svg: str
    layer_count: int = 0
    processing_time_ms: float = 0.0


class PointModel(BaseModel):
    x: float
    y: float


class CentroidResponse(BaseModel):
    bounding_box_center: PointModel
    centroid_center: PointModel
    use_centroid: bool
    shape_kind: str
    confidence: float
    transform_origin: PointModel
    bounds_confidence: float | None = None


class ResolveResponse(BaseModel):
    x: float | None = None
    y: float | None = None
    x1: float | None = None
    y1: float | None = None
    x2: float | None = None
    y2: float | None = None
