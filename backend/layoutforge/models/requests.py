"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from layoutforge.models.template import LayerOverride, LinePosition, Position, Template, ViewBox


class RenderRequest(BaseModel):
    template: Template = Field(..., description="Template document (coordinate space + ordered layers)")
    overrides: dict[str, LayerOverride] = Field(
        default_factory=dict,
        description="Per-layer user values keyed by layer id",
    )
    font_imports: bool | None = Field(
        default=None,
        description="Emit @import rules for text fonts (server setting when omitted)",
    )


class CentroidRequest(BaseModel):
    svg: str | None = Field(default=None, description="Icon markup to analyze")
    paths: list[str] = Field(default_factory=list, description="Raw path data, used when svg is absent")
    polygon: bool = Field(default=False, description="Treat a single raw path as explicit polygon points")

    @model_validator(mode="after")
    def _needs_input(self) -> CentroidRequest:
        if not self.svg and not self.paths:
            raise ValueError("provide svg markup or at least one path")
        return self


class ResolveRequest(BaseModel):
    position: LinePosition | Position = Field(..., description="Center position or line endpoints")
    view_box: ViewBox = Field(..., alias="viewBox", description="Coordinate space")

    model_config = {"populate_by_name": True}
