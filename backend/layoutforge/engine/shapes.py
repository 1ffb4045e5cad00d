"""Shape path compiler: shape descriptor + coordinate space → path-command string.

Every compiled path is absolute and centered on the layer's resolved
position. Closed subtypes end with ``Z``; ``line`` never does and ``path``
is passed through verbatim. An empty string means "no shape produced".
"""

from __future__ import annotations

import logging

from layoutforge.engine.coordinates import resolve_line_position, resolve_position
from layoutforge.models.template import LinePosition, Position, ShapeLayer, ViewBox
from layoutforge.svg.markup import parse_points
from layoutforge.svg.serializer import fmt_num

logger = logging.getLogger(__name__)

CLOSED_SUBTYPES = frozenset({"rect", "circle", "ellipse", "polygon"})


def _pt(x: float, y: float) -> str:
    return f"{fmt_num(x)},{fmt_num(y)}"


def rect_path(cx: float, cy: float, width: float, height: float, rx: float = 0.0, ry: float = 0.0) -> str:
    """Rectangle centered on (cx, cy); rounded corners use quadratic curves."""
    x = cx - width / 2
    y = cy - height / 2
    if rx <= 0 and ry <= 0:
        return (
            f"M{_pt(x, y)} L{_pt(x + width, y)} L{_pt(x + width, y + height)} "
            f"L{_pt(x, y + height)} Z"
        )

    # Radii larger than half a side would fold the outline over itself
    rx = min(max(rx, 0.0), width / 2)
    ry = min(max(ry, 0.0), height / 2)
    right = x + width
    bottom = y + height
    return (
        f"M{_pt(x + rx, y)} L{_pt(right - rx, y)} "
        f"Q{_pt(right, y)} {_pt(right, y + ry)} "
        f"L{_pt(right, bottom - ry)} "
        f"Q{_pt(right, bottom)} {_pt(right - rx, bottom)} "
        f"L{_pt(x + rx, bottom)} "
        f"Q{_pt(x, bottom)} {_pt(x, bottom - ry)} "
        f"L{_pt(x, y + ry)} "
        f"Q{_pt(x, y)} {_pt(x + rx, y)} Z"
    )


def ellipse_path(cx: float, cy: float, rx: float, ry: float) -> str:
    """Closed loop of two 180° arcs (a circle when rx == ry)."""
    r = f"{fmt_num(rx)},{fmt_num(ry)}"
    return (
        f"M{_pt(cx - rx, cy)} A{r} 0 1,0 {_pt(cx + rx, cy)} "
        f"A{r} 0 1,0 {_pt(cx - rx, cy)} Z"
    )


def polygon_path(points: str) -> str:
    """Closed path through absolute "x,y x,y ..." points; malformed pairs are skipped."""
    pairs = parse_points(points)
    if not pairs:
        return ""
    return "M" + " L".join(_pt(x, y) for x, y in pairs) + " Z"


def line_path(position: LinePosition, view_box: ViewBox) -> str:
    resolved = resolve_line_position(position, view_box)
    return (
        f"M{_pt(float(resolved.x1), float(resolved.y1))} "
        f"L{_pt(float(resolved.x2), float(resolved.y2))}"
    )


def _corner_radii(rx: float | None, ry: float | None) -> tuple[float, float]:
    # SVG convention: a single given radius applies to both axes
    if rx is None and ry is None:
        return 0.0, 0.0
    if rx is None:
        rx = ry
    if ry is None:
        ry = rx
    return float(rx), float(ry)


def compile_shape_path(layer: ShapeLayer, view_box: ViewBox) -> str:
    """Compile a shape layer into an absolute path-command string."""
    subtype = layer.subtype

    if subtype == "path":
        return layer.path or ""

    if subtype == "line":
        if not isinstance(layer.position, LinePosition):
            logger.debug("Line shape %s has no x1/y1/x2/y2 position", layer.id)
            return ""
        return line_path(layer.position, view_box)

    if subtype == "polygon":
        return polygon_path(layer.points) if layer.points else ""

    if subtype not in CLOSED_SUBTYPES:
        logger.debug("Unknown shape subtype %r on layer %s", subtype, layer.id)
        return ""

    position = layer.position
    if not isinstance(position, Position):
        logger.debug("Shape %s (%s) needs a center position", layer.id, subtype)
        return ""
    center = resolve_position(position, view_box)

    if subtype == "rect":
        if not layer.width or not layer.height:
            return ""
        rx, ry = _corner_radii(layer.rx, layer.ry)
        return rect_path(center.x, center.y, layer.width, layer.height, rx, ry)

    if subtype == "circle":
        if not layer.width:
            return ""
        radius = layer.width / 2
        return ellipse_path(center.x, center.y, radius, radius)

    # ellipse
    if not layer.width or not layer.height:
        return ""
    return ellipse_path(center.x, center.y, layer.width / 2, layer.height / 2)
