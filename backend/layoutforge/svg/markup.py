"""Embedded icon markup helpers: regex facade over already-sanitized SVG text.

Icon content arrives from an external loader and sanitizer; these helpers
only read a few attributes (viewBox, path data, polygon points) and restyle
the root <svg> element for embedding. They never raise on malformed markup.
"""

from __future__ import annotations

import logging
import math
import re

from layoutforge.models.template import ViewBox
from layoutforge.svg.serializer import escape_xml, fmt_num

logger = logging.getLogger(__name__)

_XML_DECL_RE = re.compile(r"<\?xml[^?]*\?>\s*", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>]*>\s*", re.IGNORECASE)
_LEADING_COMMENT_RE = re.compile(r"^\s*<!--.*?-->\s*", re.DOTALL)
_VIEWBOX_RE = re.compile(r"""viewBox\s*=\s*["']([^"']*)["']""", re.IGNORECASE)
_PATH_D_RE = re.compile(r"""<path\b[^>]*?\sd\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_POLYGON_POINTS_RE = re.compile(
    r"""<(?:polygon|polyline)\b[^>]*?\spoints\s*=\s*["']([^"']+)["']""",
    re.IGNORECASE,
)
_SVG_OPEN_RE = re.compile(r"<svg\b([^>]*?)(/?)>", re.IGNORECASE)
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def sanitize_declarations(markup: str) -> str:
    """Drop XML declaration, DOCTYPE and leading comments (invalid once embedded)."""
    if not markup:
        return ""
    cleaned = _XML_DECL_RE.sub("", markup)
    cleaned = _DOCTYPE_RE.sub("", cleaned)
    cleaned = _LEADING_COMMENT_RE.sub("", cleaned)
    return cleaned.strip()


def parse_view_box_values(markup: str) -> tuple[float, float, float, float] | None:
    """Raw (x, y, width, height) of the first viewBox attribute, or None if missing/garbled."""
    match = _VIEWBOX_RE.search(markup or "")
    if not match:
        return None
    parts = re.split(r"[\s,]+", match.group(1).strip())
    if len(parts) != 4:
        return None
    try:
        values = tuple(float(p) for p in parts)
    except ValueError:
        return None
    if not all(math.isfinite(v) for v in values):
        return None
    return values  # type: ignore[return-value]


def extract_view_box(markup: str) -> ViewBox | None:
    """First usable viewBox as a ViewBox model (positive extent), else None."""
    values = parse_view_box_values(markup)
    if values is None:
        return None
    x, y, width, height = values
    if width <= 0 or height <= 0:
        logger.debug("Ignoring viewBox with non-positive extent: %s", values)
        return None
    return ViewBox(x=x, y=y, width=width, height=height)


def extract_path_data(markup: str) -> list[str]:
    """All <path d="..."> values, in document order."""
    return [m.group(1) for m in _PATH_D_RE.finditer(markup or "")]


def parse_points(points: str) -> list[tuple[float, float]]:
    """Parse a points attribute ("x,y x,y ...") into pairs; an odd trailing value is dropped."""
    values: list[float] = []
    for token in re.split(r"[,\s]+", points.strip()):
        if not token:
            continue
        match = _NUMBER_RE.fullmatch(token)
        if match is None:
            logger.debug("Skipping malformed point token %r", token)
            continue
        values.append(float(token))
    return [(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2)]


def extract_polygon_points(markup: str) -> list[tuple[float, float]] | None:
    """Points of the first <polygon>/<polyline>, or None if there is none."""
    match = _POLYGON_POINTS_RE.search(markup or "")
    if not match:
        return None
    return parse_points(match.group(1))


def apply_rendering_attributes(
    markup: str,
    width: float | None = None,
    height: float | None = None,
    fill: str | None = None,
    stroke: str | None = None,
    stroke_width: float | None = None,
    stroke_linejoin: str | None = None,
) -> str:
    """Restyle the root <svg> of icon markup for embedding at a fixed size.

    Existing width/height are always replaced; overflow is forced visible so
    rotated content is not clipped by the nested viewport. Absent values are
    left alone, never defaulted.
    """
    cleaned = sanitize_declarations(markup)
    if not cleaned:
        return ""

    to_set: dict[str, str] = {"overflow": "visible"}
    if width is not None:
        to_set["width"] = fmt_num(width)
    if height is not None:
        to_set["height"] = fmt_num(height)
    if fill is not None:
        to_set["fill"] = fill
    if stroke is not None:
        to_set["stroke"] = stroke
    if stroke_width is not None and stroke_width > 0:
        to_set["stroke-width"] = fmt_num(stroke_width)
    if stroke_linejoin is not None:
        to_set["stroke-linejoin"] = stroke_linejoin

    def _rewrite(match: re.Match[str]) -> str:
        attrs = match.group(1)
        attrs = re.sub(r"""\s+(?:width|height)\s*=\s*["'][^"']*["']""", "", attrs)
        for key, value in to_set.items():
            attrs = re.sub(rf"""\s+{re.escape(key)}\s*=\s*["'][^"']*["']""", "", attrs)
            attrs += f' {key}="{escape_xml(value)}"'
        return f"<svg{attrs}{match.group(2)}>"

    rewritten, count = _SVG_OPEN_RE.subn(_rewrite, cleaned, count=1)
    if count == 0:
        logger.debug("Icon markup has no <svg> root; embedding as-is")
    return rewritten

