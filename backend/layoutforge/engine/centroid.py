"""Centroid analyzer — confidence-scored visual center of icon markup or raw paths.

The bounding-box center is visually wrong for stars, arrows and lopsided
multi-part icons, and exactly right for circles and rectangles. Analysis is
gated on the detected shape kind:

    complex-path  (<path d=...>)     multi-path strategy selection, else single-path shoelace
    polygon       (<polygon>, ...)   shoelace over explicit points (0.85)
    circle / rectangle / line / unknown   bbox center only (0.9, use_centroid=False)

Multi-path strategy selection computes three estimates over per-path
bounding boxes (equal weight, area weight, point-count weight) and trusts
them according to how well they agree:

    std-dev < 2.0   → area-weighted, confidence 0.9
    std-dev < 8.0   → mean of the three, confidence 0.7
    otherwise       → equal-weighted, confidence 0.5

Consumers use the centroid only when ``use_centroid and confidence > 0.7``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from layoutforge.engine.config import DEFAULT_CONFIG, RenderConfig
from layoutforge.engine.context import Bounds, CentroidResult, PathAnalysis, Point
from layoutforge.engine.flatten import flatten_path
from layoutforge.models.template import ViewBox
from layoutforge.svg.markup import (
    extract_path_data,
    extract_polygon_points,
    parse_view_box_values,
)
from layoutforge.utils.geometry import (
    as_points,
    bbox,
    finite_or_zero,
    mean_point,
    shoelace_centroid,
)

logger = logging.getLogger(__name__)

CENTROID_CONFIDENCE_THRESHOLD = DEFAULT_CONFIG.centroid_confidence_threshold

SHAPE_COMPLEX_PATH = "complex-path"
SHAPE_POLYGON = "polygon"
SHAPE_CIRCLE = "circle"
SHAPE_RECTANGLE = "rectangle"
SHAPE_LINE = "line"
SHAPE_UNKNOWN = "unknown"

_HAS_PATH_RE = re.compile(r"""<path\b[^>]*?\sd\s*=\s*["'][^"']+["']""", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Shape kind and bounds
# ---------------------------------------------------------------------------


def detect_shape_kind(markup: str) -> str:
    """Primary shape kind of icon markup; any <path d=...> wins over basic shapes."""
    if _HAS_PATH_RE.search(markup or ""):
        return SHAPE_COMPLEX_PATH
    lowered = (markup or "").lower()
    if "<circle" in lowered or "<ellipse" in lowered:
        return SHAPE_CIRCLE
    if "<rect" in lowered:
        return SHAPE_RECTANGLE
    if "<polygon" in lowered or "<polyline" in lowered:
        return SHAPE_POLYGON
    if "<line" in lowered:
        return SHAPE_LINE
    return SHAPE_UNKNOWN


def content_bounds(markup: str) -> Bounds:
    """Content bounds taken from the markup's viewBox; zero rectangle when missing or garbled."""
    values = parse_view_box_values(markup)
    if values is None:
        return Bounds()
    x, y, width, height = values
    return Bounds(x, y, x + width, y + height)


def path_content_bounds(markup: str) -> Bounds:
    """Bounds of the actual drawn content (flattened paths, then polygon points)."""
    chunks = [flatten_path(d) for d in extract_path_data(markup)]
    polygon = extract_polygon_points(markup)
    if polygon:
        chunks.append(as_points(polygon))
    chunks = [c for c in chunks if len(c)]
    if not chunks:
        return Bounds()
    return Bounds.from_box(bbox(np.vstack(chunks)))


def bounds_confidence(bounds: Bounds, view_box: ViewBox | None) -> float:
    """0.0-1.0 plausibility of content bounds measured against a viewBox.

    Bounds far larger than, far smaller than, or far away from the viewBox
    usually mean a parsing error rather than real content.
    """
    if (
        not all(math.isfinite(v) for v in (bounds.width, bounds.height, bounds.x_min, bounds.y_min))
        or bounds.width < 0
        or bounds.height < 0
    ):
        return 0.0
    if view_box is None:
        return 0.6

    confidence = 1.0
    largest_ratio = max(bounds.width / view_box.width, bounds.height / view_box.height)
    if largest_ratio > 100:
        confidence *= 0.1
    elif largest_ratio > 50:
        confidence *= 0.3
    elif largest_ratio > 20:
        confidence *= 0.6

    smallest_ratio = min(bounds.width / view_box.width, bounds.height / view_box.height)
    if smallest_ratio < 0.01:
        confidence *= 0.5

    center = bounds.center
    offset_x = abs(center.x - (view_box.x + view_box.width / 2))
    offset_y = abs(center.y - (view_box.y + view_box.height / 2))
    if offset_x > view_box.width * 5 or offset_y > view_box.height * 5:
        confidence *= 0.2
    elif offset_x > view_box.width * 2 or offset_y > view_box.height * 2:
        confidence *= 0.7

    if bounds.width == 0 or bounds.height == 0:
        confidence *= 0.3

    return max(0.0, min(1.0, confidence))


# ---------------------------------------------------------------------------
# Point-set centroid
# ---------------------------------------------------------------------------


def polygon_centroid(
    points: NDArray[np.float64] | Sequence[tuple[float, float]],
    config: RenderConfig = DEFAULT_CONFIG,
) -> Point:
    """Shoelace centroid with degenerate fallbacks.

    0 points → (0, 0); 1 point → itself; 2 points → midpoint;
    near-zero signed area → arithmetic mean. Never returns NaN.
    """
    pts = as_points(points)
    n = len(pts)
    if n == 0:
        return Point(0.0, 0.0)
    if n == 1:
        return Point(float(pts[0, 0]), float(pts[0, 1]))
    if n == 2:
        mx, my = mean_point(pts)
        return Point(mx, my)

    centroid = shoelace_centroid(pts, eps=config.degenerate_area_eps)
    if centroid is None:
        centroid = mean_point(pts)
    return Point(finite_or_zero(centroid[0]), finite_or_zero(centroid[1]))


# ---------------------------------------------------------------------------
# Multi-path strategy selection
# ---------------------------------------------------------------------------


def analyze_path(d: str, config: RenderConfig = DEFAULT_CONFIG) -> PathAnalysis:
    """Bounding box and point count of one flattened path."""
    points = flatten_path(d, config)
    if len(points) == 0:
        return PathAnalysis()
    return PathAnalysis(bounds=Bounds.from_box(bbox(points)), point_count=len(points))


def _weighted_center(analyses: Sequence[PathAnalysis], weights: NDArray[np.float64]) -> Point:
    centers = np.array([a.center.as_tuple() for a in analyses])
    total = float(np.sum(weights))
    cx, cy = (weights[:, None] * centers).sum(axis=0) / total
    return Point(float(cx), float(cy))


def weighting_strategies(analyses: Sequence[PathAnalysis]) -> tuple[Point, Point, Point]:
    """(equal, area, complexity) weighted centers; zero total weight falls back to equal."""
    equal = _weighted_center(analyses, np.ones(len(analyses)))

    areas = np.array([a.area for a in analyses], dtype=np.float64)
    area = _weighted_center(analyses, areas) if areas.sum() > 0 else equal

    counts = np.array([a.point_count for a in analyses], dtype=np.float64)
    complexity = _weighted_center(analyses, counts) if counts.sum() > 0 else equal

    return equal, area, complexity


def strategy_variance(estimates: Sequence[Point]) -> float:
    """Euclidean standard deviation of the estimates around their mean, in coordinate units."""
    pts = np.array([p.as_tuple() for p in estimates], dtype=np.float64)
    if len(pts) == 0:
        return 0.0
    deltas = pts - pts.mean(axis=0)
    return float(math.sqrt(np.mean(np.sum(deltas**2, axis=1))))


def select_strategy(
    equal: Point,
    area: Point,
    complexity: Point,
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[Point, float]:
    """Pick an estimate by strategy agreement; returns (center, confidence)."""
    variance = strategy_variance([equal, area, complexity])

    if variance < config.low_variance:
        return area, config.confidence_high_agreement
    if variance < config.medium_variance:
        averaged = Point(
            (equal.x + area.x + complexity.x) / 3,
            (equal.y + area.y + complexity.y) / 3,
        )
        return averaged, config.confidence_moderate_agreement
    return equal, config.confidence_low_agreement


def multi_path_centroid(
    paths: Sequence[str],
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[Point, float] | None:
    """Variance-selected center over several paths; None when no path is usable."""
    if not paths:
        return None

    analyses = [a for a in (analyze_path(d, config) for d in paths) if a.point_count > 0 and a.area > 0]
    if not analyses:
        return None

    if len(analyses) == 1:
        return analyses[0].center, config.confidence_single_path

    equal, area, complexity = weighting_strategies(analyses)
    center, confidence = select_strategy(equal, area, complexity, config)
    logger.debug(
        "Multi-path centroid over %d paths: (%.3f, %.3f) @ %.2f",
        len(analyses),
        center.x,
        center.y,
        confidence,
    )
    return center, confidence


def single_path_centroid(
    d: str,
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[Point, float] | None:
    points = flatten_path(d, config)
    if len(points) < 2:
        return None
    return polygon_centroid(points, config), config.confidence_single_path


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def compute_centroid(markup: str, config: RenderConfig = DEFAULT_CONFIG) -> CentroidResult:
    """Analyze icon markup and return both candidate centers with a confidence score."""
    bounds = content_bounds(markup)
    bbox_center = bounds.center
    kind = detect_shape_kind(markup)

    centroid_center = bbox_center
    use_centroid = False
    confidence = 0.0

    if kind == SHAPE_POLYGON:
        points = extract_polygon_points(markup)
        if points:
            centroid_center = polygon_centroid(points, config)
            use_centroid = True
            confidence = config.confidence_polygon_points
        else:
            paths = extract_path_data(markup)
            if paths and len(flatten_path(paths[0], config)) >= 3:
                centroid_center = polygon_centroid(flatten_path(paths[0], config), config)
                use_centroid = True
                confidence = config.confidence_single_path

    elif kind == SHAPE_COMPLEX_PATH:
        paths = extract_path_data(markup)
        found = multi_path_centroid(paths, config)
        if found is None and paths:
            found = single_path_centroid(paths[0], config)
        if found is not None:
            centroid_center, confidence = found
            use_centroid = True

    else:
        # Symmetric shapes gain nothing from centroid analysis; trust the bbox
        # only as far as the viewBox that produced it exists
        confidence = 0.0 if bounds.is_zero else config.confidence_symmetric

    return CentroidResult(
        bounding_box_center=bbox_center,
        centroid_center=centroid_center,
        use_centroid=use_centroid,
        shape_kind=kind,
        confidence=confidence,
    )


def compute_path_centroid(
    paths: Sequence[str],
    *,
    polygon: bool = False,
    config: RenderConfig = DEFAULT_CONFIG,
) -> CentroidResult:
    """Centroid analysis over raw path strings (shape layers carry no markup).

    The bounding-box center comes from the flattened points themselves.
    ``polygon=True`` treats a single path as explicit polygon points and uses
    the shoelace centroid directly.
    """
    flattened = [flatten_path(d, config) for d in paths if d]
    non_empty = [pts for pts in flattened if len(pts)]
    if non_empty:
        bbox_center = Bounds.from_box(bbox(np.vstack(non_empty))).center
    else:
        bbox_center = Point(0.0, 0.0)

    kind = SHAPE_POLYGON if polygon else SHAPE_COMPLEX_PATH
    centroid_center = bbox_center
    use_centroid = False
    confidence = 0.0

    if polygon and len(non_empty) == 1 and len(non_empty[0]) >= 3:
        centroid_center = polygon_centroid(non_empty[0], config)
        use_centroid = True
        confidence = config.confidence_polygon_points
    else:
        found = multi_path_centroid([d for d in paths if d], config)
        if found is None and non_empty:
            if len(non_empty[0]) >= 2:
                found = polygon_centroid(non_empty[0], config), config.confidence_single_path
        if found is not None:
            centroid_center, confidence = found
            use_centroid = True

    return CentroidResult(
        bounding_box_center=bbox_center,
        centroid_center=centroid_center,
        use_centroid=use_centroid,
        shape_kind=kind,
        confidence=confidence,
    )


def optimal_transform_origin(markup: str, config: RenderConfig = DEFAULT_CONFIG) -> Point:
    """Pivot for scale/rotate: the centroid when trusted, else the bbox center."""
    analysis = compute_centroid(markup, config)
    result = analysis.preferred_center(config.centroid_confidence_threshold)
    if math.isnan(result.x) or math.isnan(result.y):
        logger.error(
            "NaN transform origin (kind=%s, confidence=%.2f, markup=%r)",
            analysis.shape_kind,
            analysis.confidence,
            markup[:100],
        )
    return result


def should_use_centroid(markup: str, config: RenderConfig = DEFAULT_CONFIG) -> bool:
    analysis = compute_centroid(markup, config)
    return analysis.use_centroid and analysis.confidence > config.centroid_confidence_threshold
