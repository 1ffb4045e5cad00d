"""Transform composer — ordered translate/scale/rotate chains for layers.

A chain is grouped into *stages*; each stage becomes one nested
``<g transform="...">`` element, outermost first. Applied to a local point,
the innermost stage acts first (standard SVG nesting semantics).

Outer stage (always present):

    icon         translate(x, y) translate(-w/2, -h/2)   content paints from its top-left
    text/shape   translate(x, y)                         already center-anchored

Inner stages, chosen by which of scale / rotation / origin are present:

    SCALE_WITH_ORIGIN    translate(o) | scale(s) [rotate(r)] | translate(-o)
    SCALE_AND_ROTATION   scale(s) rotate(r)
    SCALE_ONLY           scale(s)
    ROTATION_ONLY        rotate(r)
    NONE                 (nothing)

The origin-pivoted case leaves the pivot fixed: evaluating the whole chain
at ``o`` gives the same point as evaluating the outer stage alone.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from layoutforge.engine.context import Point
from layoutforge.models.template import ViewBox
from layoutforge.svg.serializer import fmt_num


class TransformCase(str, enum.Enum):
    SCALE_WITH_ORIGIN = "scale-with-origin"
    SCALE_AND_ROTATION = "scale-and-rotation"
    SCALE_ONLY = "scale-only"
    ROTATION_ONLY = "rotation-only"
    NONE = "none"


@dataclass(frozen=True)
class TransformOp:
    """One primitive: translate(tx, ty) | scale(s) | rotate(deg)."""

    kind: str
    args: tuple[float, ...]

    def to_svg(self) -> str:
        if self.kind == "translate":
            return f"translate({fmt_num(self.args[0])}, {fmt_num(self.args[1])})"
        return f"{self.kind}({', '.join(fmt_num(a) for a in self.args)})"

    def matrix(self) -> NDArray[np.float64]:
        """3x3 homogeneous matrix of this operation."""
        if self.kind == "translate":
            tx, ty = self.args
            return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])
        if self.kind == "scale":
            sx = self.args[0]
            sy = self.args[1] if len(self.args) > 1 else sx
            return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])
        if self.kind == "rotate":
            theta = math.radians(self.args[0])
            c, s = math.cos(theta), math.sin(theta)
            return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        raise ValueError(f"Unknown transform kind: {self.kind}")


def translate(tx: float, ty: float) -> TransformOp:
    return TransformOp("translate", (float(tx), float(ty)))


def scale(s: float) -> TransformOp:
    return TransformOp("scale", (float(s),))


def rotate(degrees: float) -> TransformOp:
    return TransformOp("rotate", (float(degrees),))


Stage = tuple[TransformOp, ...]


@dataclass(frozen=True)
class TransformChain:
    case: TransformCase
    stages: tuple[Stage, ...]

    @property
    def ops(self) -> list[TransformOp]:
        """Flat left-to-right operation list."""
        return [op for stage in self.stages for op in stage]

    @property
    def outer(self) -> Stage:
        return self.stages[0] if self.stages else ()

    def to_svg(self) -> str:
        return format_chain(self.ops)

    def stage_transforms(self) -> list[str]:
        """One transform attribute value per nesting level."""
        return [format_chain(stage) for stage in self.stages if stage]


def select_transform_case(
    scale: float | None,
    rotation: float | None,
    origin: Point | None,
) -> TransformCase:
    if origin is not None and (scale is not None or rotation is not None):
        return TransformCase.SCALE_WITH_ORIGIN
    if scale is not None and rotation is not None:
        return TransformCase.SCALE_AND_ROTATION
    if scale is not None:
        return TransformCase.SCALE_ONLY
    if rotation is not None:
        return TransformCase.ROTATION_ONLY
    return TransformCase.NONE


def inner_chain(
    case: TransformCase,
    scale_value: float | None = None,
    rotation: float | None = None,
    origin: Point | None = None,
) -> list[Stage]:
    """Inner stages for a transform case (empty for NONE)."""
    if case is TransformCase.SCALE_WITH_ORIGIN:
        if origin is None:
            raise ValueError("scale-with-origin transform needs an origin")
        middle: list[TransformOp] = [scale(scale_value if scale_value is not None else 1.0)]
        if rotation is not None:
            middle.append(rotate(rotation))
        return [
            (translate(origin.x, origin.y),),
            tuple(middle),
            (translate(-origin.x, -origin.y),),
        ]
    if case is TransformCase.SCALE_AND_ROTATION:
        return [(scale(scale_value), rotate(rotation))]  # type: ignore[arg-type]
    if case is TransformCase.SCALE_ONLY:
        return [(scale(scale_value),)]  # type: ignore[arg-type]
    if case is TransformCase.ROTATION_ONLY:
        return [(rotate(rotation),)]  # type: ignore[arg-type]
    return []


def compose_layer_transform(
    kind: str,
    position: Point,
    width: float = 0.0,
    height: float = 0.0,
    scale_value: float | None = None,
    rotation: float | None = None,
    origin: Point | None = None,
) -> TransformChain:
    """Full chain for a layer: outer placement stage plus the case-selected inner stages.

    ``kind`` is the layer type tag; only ``svgImage`` layers get the
    half-size offset. ``origin`` must already be in outer coordinates
    (see ``scale_origin_to_outer``).
    """
    outer: list[TransformOp] = [translate(position.x, position.y)]
    if kind == "svgImage":
        outer.append(translate(-width / 2, -height / 2))

    case = select_transform_case(scale_value, rotation, origin)
    stages = [tuple(outer), *inner_chain(case, scale_value, rotation, origin)]
    return TransformChain(case=case, stages=tuple(stages))


def compose_pivot_transform(
    pivot: Point,
    scale_value: float | None = None,
    rotation: float | None = None,
) -> TransformChain:
    """Scale/rotate absolute geometry about a pivot: translate(p) inner translate(-p).

    Compiled shape paths are already placed in document space, so there is
    no outer placement stage. No scale and no rotation gives an empty chain.
    """
    case = select_transform_case(scale_value, rotation, None)
    inner = inner_chain(case, scale_value, rotation)
    if not inner:
        return TransformChain(case=TransformCase.NONE, stages=())
    stages = [(translate(pivot.x, pivot.y),), *inner, (translate(-pivot.x, -pivot.y),)]
    return TransformChain(case=case, stages=tuple(stages))


def scale_origin_to_outer(
    origin: Point,
    outer_width: float,
    outer_height: float,
    inner_view_box: ViewBox | None,
) -> Point:
    """Map an icon-internal pivot into the icon's rendered size, per axis."""
    if inner_view_box is None:
        return origin
    return Point(
        origin.x * (outer_width / inner_view_box.width),
        origin.y * (outer_height / inner_view_box.height),
    )


def to_matrix(ops: Iterable[TransformOp]) -> NDArray[np.float64]:
    """Compose operations left to right into one 3x3 matrix."""
    result = np.eye(3)
    for op in ops:
        result = result @ op.matrix()
    return result


def apply_chain(ops: Iterable[TransformOp], point: Point) -> Point:
    x, y, _ = to_matrix(ops) @ np.array([point.x, point.y, 1.0])
    return Point(float(x), float(y))


def format_chain(ops: Sequence[TransformOp]) -> str:
    return " ".join(op.to_svg() for op in ops)


def combine_transforms(parts: Iterable[str | None]) -> str:
    """Join non-empty transform strings with single spaces."""
    return " ".join(p.strip() for p in parts if p and p.strip())
