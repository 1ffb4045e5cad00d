"""Tests for icon markup helpers."""

from tests.conftest import ARROW_SVG, CIRCLE_SVG, SQUARE_POLYGON_SVG, TWO_CIRCLES_SVG

from layoutforge.models.template import ViewBox
from layoutforge.svg.markup import (
    apply_rendering_attributes,
    extract_path_data,
    extract_polygon_points,
    extract_view_box,
    parse_points,
    parse_view_box_values,
    sanitize_declarations,
)


def test_sanitize_declarations():
    cleaned = sanitize_declarations(ARROW_SVG)
    assert cleaned.startswith("<svg")
    assert "<?xml" not in cleaned
    assert "DOCTYPE" not in cleaned
    assert "<!--" not in cleaned
    assert sanitize_declarations("") == ""


def test_extract_view_box():
    assert extract_view_box(CIRCLE_SVG) == ViewBox(x=0, y=0, width=24, height=24)
    assert extract_view_box('<svg viewBox="0,0,10,5"/>') == ViewBox(x=0, y=0, width=10, height=5)
    assert extract_view_box("<svg/>") is None
    assert extract_view_box('<svg viewBox="0 0 0 10"/>') is None
    assert parse_view_box_values('<svg viewBox="0 0 0 10"/>') == (0, 0, 0, 10)
    assert parse_view_box_values('<svg viewBox="0 0 x 10"/>') is None


def test_extract_path_data_in_order():
    paths = extract_path_data(TWO_CIRCLES_SVG)
    assert len(paths) == 2
    assert paths[0].startswith("M30 50")
    assert paths[1].startswith("M130 50")


def test_extract_path_data_ignores_data_attributes():
    assert extract_path_data('<path data-d="x" d="M0 0"/>') == ["M0 0"]


def test_polygon_points():
    assert extract_polygon_points(SQUARE_POLYGON_SVG) == [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert extract_polygon_points(CIRCLE_SVG) is None
    assert parse_points("1,2 3,4 5") == [(1, 2), (3, 4)]
    assert parse_points("1 2,3 4") == [(1, 2), (3, 4)]


def test_apply_rendering_attributes():
    out = apply_rendering_attributes(
        CIRCLE_SVG, width=48, height=36, fill="#f00", stroke="#00f", stroke_width=3
    )
    root = out[: out.index(">") + 1]
    assert 'width="48"' in root
    assert 'height="36"' in root
    assert 'width="24"' not in root
    assert 'overflow="visible"' in root
    assert 'fill="#f00"' in root
    assert 'fill="none"' not in root
    assert 'stroke="#00f"' in root
    assert 'stroke-width="3"' in root
    assert root.count("stroke-width") == 1
    # Child elements are untouched
    assert '<circle cx="12" cy="12" r="10"/>' in out


def test_apply_rendering_attributes_leaves_absent_values_alone():
    out = apply_rendering_attributes(CIRCLE_SVG, stroke_width=0)
    root = out[: out.index(">") + 1]
    assert 'stroke-width="2"' in root
    assert 'fill="none"' in root
    assert "width=" not in root.replace("stroke-width", "")


def test_apply_rendering_attributes_without_svg_root():
    assert apply_rendering_attributes("<g/>", width=10) == "<g/>"
    assert apply_rendering_attributes("", width=10) == ""


def test_apply_rendering_attributes_escapes_values():
    out = apply_rendering_attributes(CIRCLE_SVG, fill='url("#g")')
    assert 'fill="url(&quot;#g&quot;)"' in out
