"""Coordinate resolution: percentage-or-absolute values against a coordinate space.

    absolute = origin + (percentage / 100) * extent

A plain number passes through unchanged (origin and extent are ignored).
Negative and >100% values are valid and place content outside the space.
Resolution never raises: an unparseable value resolves to the origin.

Precondition (caller contract, not checked here): ``extent`` and ``origin``
are finite. The ViewBox model enforces this at the template boundary.
"""

from __future__ import annotations

import logging
import re

from layoutforge.engine.context import Point
from layoutforge.models.template import Coordinate, LinePosition, Position, ViewBox

logger = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _leading_number(text: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return None
    return float(match.group(1))


def is_percentage(value: Coordinate) -> bool:
    return isinstance(value, str) and "%" in value


def parse_percentage(value: str) -> float | None:
    """"50%" → 0.5, "-25%" → -0.25, "150%" → 1.5; None when there is no number."""
    number = _leading_number(value.replace("%", ""))
    if number is None:
        return None
    return number / 100


def resolve_coordinate(value: Coordinate, extent: float, origin: float = 0.0) -> float:
    """Resolve one axis value to an absolute coordinate."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    if isinstance(value, str):
        if is_percentage(value):
            fraction = parse_percentage(value)
            if fraction is not None:
                return origin + extent * fraction
        else:
            # A numeric string is an absolute value ("42" → 42)
            number = _leading_number(value)
            if number is not None:
                return number

    logger.debug("Unparseable coordinate %r; resolving to origin %s", value, origin)
    return origin


def resolve_position(position: Position, view_box: ViewBox) -> Point:
    return Point(
        resolve_coordinate(position.x, view_box.width, view_box.x),
        resolve_coordinate(position.y, view_box.height, view_box.y),
    )


def resolve_line_position(position: LinePosition, view_box: ViewBox) -> LinePosition:
    """Resolve the four endpoints of a line shape; the result holds floats only."""
    return LinePosition(
        x1=resolve_coordinate(position.x1, view_box.width, view_box.x),
        y1=resolve_coordinate(position.y1, view_box.height, view_box.y),
        x2=resolve_coordinate(position.x2, view_box.width, view_box.x),
        y2=resolve_coordinate(position.y2, view_box.height, view_box.y),
    )


def resolve_any_position(
    position: Position | LinePosition,
    view_box: ViewBox,
) -> Point | LinePosition:
    if isinstance(position, LinePosition):
        return resolve_line_position(position, view_box)
    return resolve_position(position, view_box)


def line_midpoint(position: LinePosition, view_box: ViewBox) -> Point:
    """Visual center of a line shape."""
    resolved = resolve_line_position(position, view_box)
    return Point(
        (float(resolved.x1) + float(resolved.x2)) / 2,
        (float(resolved.y1) + float(resolved.y2)) / 2,
    )


def percentage_position(x_percent: float, y_percent: float) -> Position:
    return Position(x=f"{x_percent:g}%", y=f"{y_percent:g}%")


PERCENT_POSITIONS: dict[str, Position] = {
    # Corners
    "top_left": percentage_position(0, 0),
    "top_right": percentage_position(100, 0),
    "bottom_left": percentage_position(0, 100),
    "bottom_right": percentage_position(100, 100),
    # Centers
    "center": percentage_position(50, 50),
    "top_center": percentage_position(50, 0),
    "bottom_center": percentage_position(50, 100),
    "left_center": percentage_position(0, 50),
    "right_center": percentage_position(100, 50),
    # Quarters
    "top_left_quarter": percentage_position(25, 25),
    "top_right_quarter": percentage_position(75, 25),
    "bottom_left_quarter": percentage_position(25, 75),
    "bottom_right_quarter": percentage_position(75, 75),
}
