"""Tests for percentage/absolute coordinate resolution."""

import pytest

from tests.conftest import SPACE_400x300

from layoutforge.engine.context import Point
from layoutforge.engine.coordinates import (
    PERCENT_POSITIONS,
    is_percentage,
    line_midpoint,
    parse_percentage,
    percentage_position,
    resolve_any_position,
    resolve_coordinate,
    resolve_line_position,
    resolve_position,
)
from layoutforge.models.template import LinePosition, Position, ViewBox


def test_percentage_resolves_against_extent():
    assert resolve_coordinate("50%", 200, 0) == 100
    assert resolve_coordinate("-10%", 200, 0) == -20
    assert resolve_coordinate("150%", 200, 0) == 300


def test_absolute_ignores_origin_and_extent():
    assert resolve_coordinate(42, 200, 5) == 42
    assert resolve_coordinate(-7.5, 10, 100) == -7.5


def test_percentage_adds_origin():
    assert resolve_coordinate("25%", 200, 10) == 60


def test_numeric_string_is_absolute():
    assert resolve_coordinate("42", 200, 5) == 42


@pytest.mark.parametrize("garbage", ["abc", "", "%", "px%"])
def test_unparseable_falls_back_to_origin(garbage):
    assert resolve_coordinate(garbage, 200, 7) == 7


def test_bool_is_not_a_number():
    assert resolve_coordinate(True, 200, 3) == 3  # type: ignore[arg-type]


def test_percentage_helpers():
    assert is_percentage("10%")
    assert not is_percentage("10")
    assert not is_percentage(10)
    assert parse_percentage("50%") == 0.5
    assert parse_percentage("-25%") == -0.25
    assert parse_percentage(".5%") == pytest.approx(0.005)
    assert parse_percentage("%") is None


def test_resolve_position_per_axis():
    point = resolve_position(Position(x="50%", y="50%"), SPACE_400x300)
    assert point == Point(200, 150)

    mixed = resolve_position(Position(x=10, y="10%"), SPACE_400x300)
    assert mixed == Point(10, 30)


def test_resolve_position_with_offset_origin():
    space = ViewBox(x=-100, y=50, width=200, height=100)
    point = resolve_position(Position(x="50%", y="0%"), space)
    assert point == Point(0, 50)


def test_resolve_line_position():
    line = resolve_line_position(LinePosition(x1="0%", y1="50%", x2="100%", y2=20), SPACE_400x300)
    assert (line.x1, line.y1, line.x2, line.y2) == (0, 150, 400, 20)


def test_resolve_any_position_dispatches():
    assert isinstance(resolve_any_position(Position(x=1, y=2), SPACE_400x300), Point)
    line = resolve_any_position(LinePosition(x1=0, y1=0, x2=10, y2=10), SPACE_400x300)
    assert isinstance(line, LinePosition)


def test_line_midpoint():
    mid = line_midpoint(LinePosition(x1="0%", y1=0, x2="100%", y2=100), SPACE_400x300)
    assert mid == Point(200, 50)


def test_named_percent_positions():
    assert PERCENT_POSITIONS["center"] == percentage_position(50, 50)
    bottom_right = resolve_position(PERCENT_POSITIONS["bottom_right"], SPACE_400x300)
    assert bottom_right == Point(400, 300)
    quarter = resolve_position(PERCENT_POSITIONS["top_left_quarter"], SPACE_400x300)
    assert quarter == Point(100, 75)
