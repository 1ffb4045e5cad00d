"""Template document model: the validated input contract of the render engine.

Layers are a closed tagged union over shape / text / svgImage, discriminated
on ``type``. Field names are snake_case in Python; template documents use the
camelCase spelling (``strokeWidth``, ``textPath``, ``svgContent`` ...), which
is accepted through aliases.

Caller contract violations (non-positive coordinate space, duplicate layer
ids, non-positive scale) are rejected here with ``pydantic.ValidationError``
so the geometry code never has to defend against them.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from layoutforge.engine.context import Point
from layoutforge.svg.serializer import fmt_num

Coordinate = Union[float, str]

KNOWN_SHAPE_SUBTYPES = ("rect", "circle", "ellipse", "polygon", "line", "path")


class _TemplateModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ViewBox(_TemplateModel):
    """Coordinate space: origin (x, y) and a strictly positive extent."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    x: float = Field(default=0.0, allow_inf_nan=False)
    y: float = Field(default=0.0, allow_inf_nan=False)
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)

    def to_attr(self) -> str:
        return " ".join(fmt_num(v) for v in (self.x, self.y, self.width, self.height))


class Position(_TemplateModel):
    """Center-anchored coordinate pair; each axis absolute or "NN%"."""

    x: Coordinate
    y: Coordinate


class LinePosition(_TemplateModel):
    x1: Coordinate
    y1: Coordinate
    x2: Coordinate
    y2: Coordinate


def _centered() -> Position:
    return Position(x="50%", y="50%")


class FontDescriptor(_TemplateModel):
    """Structured font choice as produced by the font catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    family: str
    name: str | None = None
    category: str | None = None


class _LayerBase(_TemplateModel):
    id: str = Field(min_length=1)
    position: Position = Field(default_factory=_centered)
    rotation: float | None = None
    scale: float | None = Field(default=None, gt=0)
    clip: str | None = None
    opacity: float | None = Field(default=None, ge=0, le=1)


class ShapeLayer(_LayerBase):
    type: Literal["shape"] = "shape"
    subtype: str
    # Line shapes carry four coordinates instead of a center
    position: LinePosition | Position = Field(default_factory=_centered)
    width: float | None = None
    height: float | None = None
    rx: float | None = None
    ry: float | None = None
    points: str | None = None
    path: str | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    stroke_linejoin: str | None = None


class TextLayer(_LayerBase):
    type: Literal["text"] = "text"
    text: str = Field(default="", validation_alias=AliasChoices("default", "text"))
    label: str | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_weight: int | str | None = None
    font_color: str | None = None
    stroke_color: str | None = None
    stroke_width: float | None = None
    stroke_linejoin: str | None = None
    # Curved text: id of a path-bearing shape layer
    text_path: str | None = None
    start_offset: str | None = None
    dy: float | None = None
    dominant_baseline: str | None = None
    multiline: bool = False
    line_height: float | None = Field(default=None, gt=0)


class IconLayer(_LayerBase):
    """Embedded vector icon; its markup carries its own nested viewBox."""

    type: Literal["svgImage"] = "svgImage"
    svg_content: str | None = None
    svg_id: str | None = None
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    # Raw templates say fill/stroke, processed layers say color/strokeColor
    color: str | None = Field(default=None, validation_alias=AliasChoices("fill", "color"))
    stroke_color: str | None = Field(
        default=None,
        validation_alias=AliasChoices("stroke", "strokeColor", "stroke_color"),
    )
    stroke_width: float | None = None
    stroke_linejoin: str | None = None
    # Pivot in the icon's own coordinate space
    transform_origin: Point | None = None
    # Pivot on the icon's visual centroid when scaled/rotated without an explicit origin
    auto_pivot: bool = False


Layer = Annotated[Union[ShapeLayer, TextLayer, IconLayer], Field(discriminator="type")]


class Template(_TemplateModel):
    """A declarative template: coordinate space + ordered layers (list order = paint order)."""

    id: str = ""
    name: str = ""
    description: str = ""
    width: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    height: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    view_box: ViewBox | None = None
    layers: list[Layer] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_contract(self) -> Template:
        if self.view_box is None and (self.width is None or self.height is None):
            raise ValueError("template needs width and height, or an explicit viewBox")
        seen: set[str] = set()
        for layer in self.layers:
            if layer.id in seen:
                raise ValueError(f"duplicate layer id: {layer.id}")
            seen.add(layer.id)
        return self

    @property
    def coordinate_space(self) -> ViewBox:
        """Explicit width/height win over viewBox, as in the template loader."""
        if self.width is not None and self.height is not None:
            return ViewBox(x=0, y=0, width=self.width, height=self.height)
        if self.view_box is None:
            raise ValueError("template has no coordinate space")
        return self.view_box

    def get_layer(self, layer_id: str) -> ShapeLayer | TextLayer | IconLayer | None:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None


class LayerOverride(_TemplateModel):
    """User-entered values for one layer. Unset fields fall back to the template."""

    text: str | None = None
    font: FontDescriptor | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_weight: int | str | None = None
    font_color: str | None = None
    text_color: str | None = None
    fill: str | None = None
    fill_color: str | None = None
    stroke: str | None = None
    stroke_color: str | None = None
    stroke_width: float | None = None
    stroke_linejoin: str | None = None
    stroke_opacity: float | None = None
    color: str | None = None
    opacity: float | None = Field(default=None, ge=0, le=1)
    scale: float | None = Field(default=None, gt=0)
    rotation: float | None = None
    transform_origin: Point | None = None
    svg_content: str | None = None
    start_offset: str | None = None
    line_height: float | None = Field(default=None, gt=0)


Overrides = dict[str, LayerOverride]
