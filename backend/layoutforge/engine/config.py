"""Render configuration: sampling constants and centroid decision thresholds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    """Constants shared by the flattener, centroid analyzer and assembler."""

    # Curve flattening (fixed counts keep runtime linear in path size)
    samples_cubic: int = 10
    samples_quadratic: int = 8
    samples_arc: int = 8  # linear interpolation between arc endpoints

    # Shoelace degeneracy
    degenerate_area_eps: float = 1e-6

    # Consumer rule: centroid wins only above this confidence
    centroid_confidence_threshold: float = 0.7

    # Multi-path strategy agreement (std-dev in coordinate units)
    low_variance: float = 2.0
    medium_variance: float = 8.0

    # Confidence scores
    confidence_symmetric: float = 0.9
    confidence_polygon_points: float = 0.85
    confidence_single_path: float = 0.8
    confidence_high_agreement: float = 0.9
    confidence_moderate_agreement: float = 0.7
    confidence_low_agreement: float = 0.5

    # Text
    default_line_height: float = 1.2

    # Web font @import rule; {family} is URL-encoded with '+' for spaces
    font_import_url: str = (
        "https://fonts.googleapis.com/css2?family={family}:wght@400;600;700&display=swap"
    )
    include_font_imports: bool = True


DEFAULT_CONFIG = RenderConfig()
