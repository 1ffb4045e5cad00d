"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def as_points(points: object) -> NDArray[np.float64]:
    """Coerce a point sequence into an Nx2 float array (empty → shape (0, 2))."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def shoelace_centroid(
    points: NDArray[np.float64],
    eps: float = 1e-6,
) -> tuple[float, float] | None:
    """Area centroid of a closed polygon, or None when the area is degenerate.

    A = 1/2 Σ (x_i y_{i+1} - x_{i+1} y_i)
    Cx = 1/(6A) Σ (x_i + x_{i+1}) (x_i y_{i+1} - x_{i+1} y_i), Cy analogous.
    """
    if len(points) < 3:
        return None
    x = points[:, 0]
    y = points[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    cross = x * y_next - x_next * y
    area = 0.5 * float(np.sum(cross))
    if abs(area) < eps:
        return None
    cx = float(np.sum((x + x_next) * cross)) / (6 * area)
    cy = float(np.sum((y + y_next) * cross)) / (6 * area)
    return (cx, cy)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def mean_point(points: NDArray[np.float64]) -> tuple[float, float]:
    """Arithmetic mean of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def finite_or_zero(value: float) -> float:
    return value if np.isfinite(value) else 0.0
