"""Document assembler — template + overrides → one self-contained SVG document.

Per layer, in list order (list order is paint order):

    1. resolve the center position against the template coordinate space
    2. compile or fetch the geometry (shape path, text content, icon markup)
    3. compose the transform chain
    4. merge styles: override > template default > omitted
    5. emit one ``<g data-layer="...">`` fragment

Shapes referenced by id go into the shared <defs> block once: as a
``<mask>`` when another layer clips to them, as a bare ``<path id>`` when a
text layer follows them. A shape with neither fill nor stroke is a guide and
is never painted inline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar, assert_never

from layoutforge.engine.centroid import compute_path_centroid, optimal_transform_origin
from layoutforge.engine.config import DEFAULT_CONFIG, RenderConfig
from layoutforge.engine.context import Point
from layoutforge.engine.coordinates import line_midpoint, resolve_position
from layoutforge.engine.fonts import FontLookup, extract_font_family, font_style_block
from layoutforge.engine.shapes import compile_shape_path
from layoutforge.engine.text import line_dy, split_lines
from layoutforge.engine.transforms import (
    compose_layer_transform,
    compose_pivot_transform,
    scale_origin_to_outer,
)
from layoutforge.models.template import (
    IconLayer,
    Layer,
    LayerOverride,
    LinePosition,
    Overrides,
    ShapeLayer,
    Template,
    TextLayer,
    ViewBox,
)
from layoutforge.svg.markup import apply_rendering_attributes, extract_view_box
from layoutforge.svg.serializer import escape_xml, fmt_num, format_attrs, indent, serialize_document

logger = logging.getLogger(__name__)

T = TypeVar("T")

IconLoader = Callable[[str], str | None]

_EMPTY_OVERRIDE = LayerOverride()


def first_present(*values: T | None) -> T | None:
    """First value that is not None (falsy values such as 0 or "" still count)."""
    for value in values:
        if value is not None:
            return value
    return None


def is_unpainted(paint: str | None) -> bool:
    return paint is None or paint.strip().lower() == "none"


def mask_id(layer_id: str) -> str:
    return f"mask-{layer_id}"


@dataclass
class RenderContext:
    """Per-call state shared by the layer renderers. Discarded after the document is built."""

    template: Template
    view_box: ViewBox
    overrides: Mapping[str, LayerOverride]
    config: RenderConfig = DEFAULT_CONFIG
    font_lookup: FontLookup | None = None
    icon_loader: IconLoader | None = None
    shape_paths: dict[str, str] = field(default_factory=dict)
    guide_ids: set[str] = field(default_factory=set)

    def override_for(self, layer_id: str) -> LayerOverride:
        return self.overrides.get(layer_id) or _EMPTY_OVERRIDE


# ---------------------------------------------------------------------------
# Style merging
# ---------------------------------------------------------------------------


def merge_style(layer: Layer, override: LayerOverride, lookup: FontLookup | None = None) -> dict[str, object]:
    """Effective style attributes of a layer, keyed by SVG attribute name.

    Values are taken from the override first, then the template; an attribute
    absent from both is left out rather than defaulted.
    """
    if isinstance(layer, ShapeLayer):
        return {
            "fill": first_present(override.fill_color, override.fill, layer.fill),
            "stroke": first_present(override.stroke_color, override.stroke, layer.stroke),
            "stroke-width": first_present(override.stroke_width, layer.stroke_width),
            "stroke-linejoin": first_present(override.stroke_linejoin, layer.stroke_linejoin),
        }

    if isinstance(layer, TextLayer):
        stroke_width = first_present(override.stroke_width, layer.stroke_width)
        # Stroke only when it has width
        stroked = stroke_width is not None and stroke_width > 0
        return {
            "font-family": first_present(extract_font_family(override, lookup), layer.font_family),
            "font-size": first_present(override.font_size, layer.font_size),
            "font-weight": first_present(override.font_weight, layer.font_weight),
            "fill": first_present(override.font_color, override.text_color, layer.font_color),
            "stroke": first_present(override.stroke_color, layer.stroke_color) if stroked else None,
            "stroke-width": stroke_width if stroked else None,
            "stroke-opacity": override.stroke_opacity,
            "stroke-linejoin": first_present(override.stroke_linejoin, layer.stroke_linejoin),
        }

    if isinstance(layer, IconLayer):
        return {
            "fill": first_present(override.color, layer.color),
            "stroke": first_present(override.stroke_color, layer.stroke_color),
            "stroke-width": first_present(override.stroke_width, layer.stroke_width),
            "stroke-linejoin": first_present(override.stroke_linejoin, layer.stroke_linejoin),
        }

    assert_never(layer)


def _nest(transforms: list[str], body: str) -> str:
    """Wrap ``body`` in one <g transform> per entry, outermost first."""
    markup = body
    for transform in reversed(transforms):
        markup = f'<g transform="{transform}">\n{indent(markup)}\n</g>'
    return markup


# ---------------------------------------------------------------------------
# Layer renderers
# ---------------------------------------------------------------------------


def _shape_pivot(layer: ShapeLayer, path: str, ctx: RenderContext) -> Point:
    if isinstance(layer.position, LinePosition):
        return line_midpoint(layer.position, ctx.view_box)
    if layer.subtype in ("polygon", "path"):
        analysis = compute_path_centroid([path], polygon=layer.subtype == "polygon", config=ctx.config)
        return analysis.preferred_center(ctx.config.centroid_confidence_threshold)
    return resolve_position(layer.position, ctx.view_box)


def render_shape(layer: ShapeLayer, override: LayerOverride, ctx: RenderContext) -> str | None:
    path = ctx.shape_paths.get(layer.id, "")
    if not path:
        logger.debug("Shape %s (%s) produced no path; omitting", layer.id, layer.subtype)
        return None

    style = merge_style(layer, override)
    if is_unpainted(style["fill"]) and is_unpainted(style["stroke"]):  # type: ignore[arg-type]
        logger.debug("Shape %s is a guide (no fill, no stroke); not painted", layer.id)
        return None

    scale_value = first_present(override.scale, layer.scale)
    rotation = first_present(override.rotation, layer.rotation)
    transform = None
    if scale_value is not None or rotation is not None:
        chain = compose_pivot_transform(_shape_pivot(layer, path, ctx), scale_value, rotation)
        transform = chain.to_svg() or None

    attrs = format_attrs({"d": path, **style, "transform": transform})
    return f"<path {attrs} />"


def _tspans(layer: TextLayer, text: str, override: LayerOverride, font_size: float | None, ctx: RenderContext) -> str | None:
    """Multi-line body as centered <tspan> lines; None for single-line text."""
    lines = split_lines(text)
    if not layer.multiline or len(lines) < 2:
        return None

    line_height = first_present(override.line_height, layer.line_height, ctx.config.default_line_height)
    # Without a font size, space the lines in em units
    size, unit = (font_size, "") if font_size is not None else (1.0, "em")
    tspans = []
    for i, line in enumerate(lines):
        dy = line_dy(i, len(lines), size, line_height)  # type: ignore[arg-type]
        tspans.append(f'<tspan x="0" dy="{fmt_num(dy)}{unit}">{escape_xml(line)}</tspan>')
    return "\n".join(tspans)


def render_text(layer: TextLayer, override: LayerOverride, ctx: RenderContext) -> str | None:
    text = first_present(override.text, layer.text) or ""
    style = merge_style(layer, override, ctx.font_lookup)
    font_size = style["font-size"]

    guide = layer.text_path if layer.text_path in ctx.guide_ids else None
    if layer.text_path and guide is None:
        logger.warning("Text layer %s follows missing path %r; rendering as positioned text", layer.id, layer.text_path)

    if guide is not None:
        # Curved text is placed by its guide path; no translate
        attrs = format_attrs(
            {
                "text-anchor": "middle",
                "dominant-baseline": layer.dominant_baseline,
                "dy": layer.dy,
                **style,
            }
        )
        path_attrs = format_attrs(
            {
                "href": f"#{guide}",
                "startOffset": first_present(override.start_offset, layer.start_offset),
            }
        )
        return f"<text {attrs}><textPath {path_attrs}>{escape_xml(text)}</textPath></text>"

    position = resolve_position(layer.position, ctx.view_box)
    chain = compose_layer_transform(
        "text",
        position,
        scale_value=first_present(override.scale, layer.scale),
        rotation=first_present(override.rotation, layer.rotation),
    )
    attrs = format_attrs(
        {
            "text-anchor": "middle",
            "dominant-baseline": layer.dominant_baseline or "central",
            "dy": layer.dy,
            **style,
        }
    )
    tspans = _tspans(layer, text, override, font_size, ctx)  # type: ignore[arg-type]
    if tspans is not None:
        element = f"<text {attrs}>\n{indent(tspans)}\n</text>"
    else:
        element = f"<text {attrs}>{escape_xml(text)}</text>"
    return _nest([chain.to_svg()], element)


def _icon_content(layer: IconLayer, override: LayerOverride, ctx: RenderContext) -> str | None:
    content = first_present(override.svg_content, layer.svg_content)
    if content is None and layer.svg_id and ctx.icon_loader is not None:
        content = ctx.icon_loader(layer.svg_id)
    return content or None


def render_icon(layer: IconLayer, override: LayerOverride, ctx: RenderContext) -> str | None:
    content = _icon_content(layer, override, ctx)
    if content is None:
        logger.debug("Icon layer %s has no content; omitting", layer.id)
        return None

    style = merge_style(layer, override)
    processed = apply_rendering_attributes(
        content,
        width=layer.width,
        height=layer.height,
        fill=style["fill"],  # type: ignore[arg-type]
        stroke=style["stroke"],  # type: ignore[arg-type]
        stroke_width=style["stroke-width"],  # type: ignore[arg-type]
        stroke_linejoin=style["stroke-linejoin"],  # type: ignore[arg-type]
    )

    scale_value = first_present(override.scale, layer.scale)
    rotation = first_present(override.rotation, layer.rotation)
    origin = first_present(override.transform_origin, layer.transform_origin)
    if origin is None and layer.auto_pivot and (scale_value is not None or rotation is not None):
        origin = optimal_transform_origin(content, ctx.config)
    if origin is not None:
        origin = scale_origin_to_outer(origin, layer.width, layer.height, extract_view_box(content))

    position = resolve_position(layer.position, ctx.view_box)
    chain = compose_layer_transform(
        "svgImage",
        position,
        layer.width,
        layer.height,
        scale_value=scale_value,
        rotation=rotation,
        origin=origin,
    )
    logger.debug("Icon %s transform case: %s", layer.id, chain.case.value)
    return _nest(chain.stage_transforms(), processed)


def render_layer(layer: Layer, ctx: RenderContext) -> str | None:
    """One layer's fragment wrapped in its ``<g data-layer>`` group, or None if it paints nothing."""
    override = ctx.override_for(layer.id)

    if isinstance(layer, ShapeLayer):
        inner = render_shape(layer, override, ctx)
    elif isinstance(layer, TextLayer):
        inner = render_text(layer, override, ctx)
    elif isinstance(layer, IconLayer):
        inner = render_icon(layer, override, ctx)
    else:
        assert_never(layer)

    if not inner:
        return None

    group = {"data-layer": layer.id, "mask": None, "opacity": first_present(override.opacity, layer.opacity)}
    if layer.clip:
        clip_path = ctx.shape_paths.get(layer.clip)
        if clip_path:
            group["mask"] = f"url(#{mask_id(layer.clip)})"
        else:
            logger.warning("Layer %s clips to missing shape %r; clip ignored", layer.id, layer.clip)
    return f"<g {format_attrs(group)}>\n{indent(inner)}\n</g>"


# ---------------------------------------------------------------------------
# Definitions and document
# ---------------------------------------------------------------------------


def collect_font_families(ctx: RenderContext) -> list[str]:
    families = []
    for layer in ctx.template.layers:
        if isinstance(layer, TextLayer):
            override = ctx.override_for(layer.id)
            family = first_present(extract_font_family(override, ctx.font_lookup), layer.font_family)
            if family:
                families.append(family)
    return families


def build_definitions(ctx: RenderContext, font_imports: bool) -> list[str]:
    """Shared <defs> entries: font imports, then masks and guide paths in layer order."""
    definitions: list[str] = []

    if font_imports:
        style = font_style_block(collect_font_families(ctx), ctx.config.font_import_url)
        if style:
            definitions.append(style)

    clip_refs = {layer.clip for layer in ctx.template.layers if layer.clip}
    text_path_refs = {
        layer.text_path for layer in ctx.template.layers if isinstance(layer, TextLayer) and layer.text_path
    }

    for layer in ctx.template.layers:
        if not isinstance(layer, ShapeLayer):
            continue
        path = ctx.shape_paths.get(layer.id, "")
        if not path:
            continue
        if layer.id in clip_refs:
            definitions.append(
                f'<mask {format_attrs({"id": mask_id(layer.id)})}>\n'
                f'  <path {format_attrs({"d": path, "fill": "white"})} />\n'
                "</mask>"
            )
        if layer.id in text_path_refs:
            definitions.append(f'<path {format_attrs({"id": layer.id, "d": path, "fill": "none"})} />')
            ctx.guide_ids.add(layer.id)

    return definitions


def coerce_overrides(overrides: Mapping[str, LayerOverride | Mapping] | None) -> Overrides:
    """Validate plain-dict overrides (as decoded from JSON) into LayerOverride models."""
    if not overrides:
        return {}
    return {
        layer_id: value if isinstance(value, LayerOverride) else LayerOverride.model_validate(value)
        for layer_id, value in overrides.items()
    }


def render_document(
    template: Template,
    overrides: Mapping[str, LayerOverride | Mapping] | None = None,
    *,
    config: RenderConfig = DEFAULT_CONFIG,
    font_imports: bool | None = None,
    font_lookup: FontLookup | None = None,
    icon_loader: IconLoader | None = None,
) -> str:
    """Render a template to a complete SVG document string.

    ``font_imports`` defaults to ``config.include_font_imports``.
    ``font_lookup`` and ``icon_loader`` are optional collaborators: the first
    maps a font descriptor or name to a display family, the second returns
    icon markup for layers that carry only an ``svg_id``.
    """
    view_box = template.coordinate_space
    ctx = RenderContext(
        template=template,
        view_box=view_box,
        overrides=coerce_overrides(overrides),
        config=config,
        font_lookup=font_lookup,
        icon_loader=icon_loader,
    )
    ctx.shape_paths = {
        layer.id: compile_shape_path(layer, view_box) for layer in template.layers if isinstance(layer, ShapeLayer)
    }

    include_fonts = config.include_font_imports if font_imports is None else font_imports
    definitions = build_definitions(ctx, include_fonts)

    fragments = []
    for layer in template.layers:
        fragment = render_layer(layer, ctx)
        if fragment:
            fragments.append(fragment)

    logger.info(
        "Rendered template %r: %d/%d layers, %d definitions",
        template.id or template.name,
        len(fragments),
        len(template.layers),
        len(definitions),
    )
    return serialize_document(view_box.to_attr(), definitions, fragments, title=escape_xml(template.name))
