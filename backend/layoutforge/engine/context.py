"""Transient value types produced during a single render pass.

None of these are persisted; they are computed on demand from a Template
and discarded after the document string is assembled.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """An absolute 2D point."""

    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned content bounds."""

    x_min: float = 0.0
    y_min: float = 0.0
    x_max: float = 0.0
    y_max: float = 0.0

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Point:
        return Point(self.x_min + self.width / 2, self.y_min + self.height / 2)

    @property
    def is_zero(self) -> bool:
        return self.width == 0 and self.height == 0 and self.x_min == 0 and self.y_min == 0

    @classmethod
    def from_box(cls, box: tuple[float, float, float, float]) -> Bounds:
        return cls(*box)


@dataclass(frozen=True)
class PathAnalysis:
    """Per-path summary used by the multi-path centroid strategies."""

    bounds: Bounds = field(default_factory=Bounds)
    point_count: int = 0

    @property
    def center(self) -> Point:
        return self.bounds.center

    @property
    def area(self) -> float:
        # Bounding-box area of the flattened points, not the shoelace area
        return self.bounds.width * self.bounds.height


@dataclass(frozen=True)
class CentroidResult:
    bounding_box_center: Point
    centroid_center: Point
    use_centroid: bool
    shape_kind: str
    confidence: float

    def preferred_center(self, threshold: float = 0.7) -> Point:
        """Centroid when trusted (use_centroid and confidence > threshold), else bbox center."""
        if self.use_centroid and self.confidence > threshold:
            return self.centroid_center
        return self.bounding_box_center
