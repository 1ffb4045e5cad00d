"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest

from layoutforge.models.template import Template, ViewBox


# Icon markup

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 50">
  <rect x="10" y="5" width="80" height="40" fill="#4ECDC4"/>
</svg>'''

SQUARE_POLYGON_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <polygon points="0,0 10,0 10,10 0,10"/>
</svg>'''

# Lopsided triangle: bbox center (5, 5), area centroid (10/3, 10/3)
TRIANGLE_PATH = "M0 0 L10 0 L0 10 Z"

TRIANGLE_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <path d="{TRIANGLE_PATH}"/>
</svg>'''


def cubic_circle(cx: float, cy: float, r: float) -> str:
    """Circle drawn with four cubic segments, as icon exporters write them."""
    k = 0.5523 * r
    return (
        f"M{cx - r} {cy} "
        f"C{cx - r} {cy - k} {cx - k} {cy - r} {cx} {cy - r} "
        f"C{cx + k} {cy - r} {cx + r} {cy - k} {cx + r} {cy} "
        f"C{cx + r} {cy + k} {cx + k} {cy + r} {cx} {cy + r} "
        f"C{cx - k} {cy + r} {cx - r} {cy + k} {cx - r} {cy} Z"
    )


TWO_CIRCLES_SVG = f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">
  <path d="{cubic_circle(50, 50, 20)}"/>
  <path d="{cubic_circle(150, 50, 20)}"/>
</svg>'''

# Strategies disagree a little: equal (22.5, 7.5), area (15, 9) → std-dev ≈ 3.6
NEAR_SQUARES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 40 20">
  <path d="M0 0 L20 0 L20 20 L0 20 Z"/>
  <path d="M30 0 L40 0 L40 10 L30 10 Z"/>
</svg>'''

# Strategies disagree strongly: std-dev ≈ 32.9
FAR_SQUARES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">
  <path d="M0 0 L100 0 L100 100 L0 100 Z"/>
  <path d="M180 0 L190 0 L190 10 L180 10 Z"/>
</svg>'''

ARROW_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">
<!-- exported -->
<svg xmlns="http://www.w3.org/2000/svg" width="48" height="48" viewBox="0 0 24 24">
  <path d="M4 12 L14 4 L14 9 L20 9 L20 15 L14 15 L14 20 Z"/>
</svg>'''


# Templates

SPACE_400x300 = ViewBox(x=0, y=0, width=400, height=300)

RECT_TEMPLATE = {
    "id": "rect-only",
    "name": "Rect",
    "width": 400,
    "height": 300,
    "layers": [
        {
            "id": "box",
            "type": "shape",
            "subtype": "rect",
            "position": {"x": "50%", "y": "50%"},
            "width": 200,
            "height": 100,
            "fill": "#ff0000",
        },
    ],
}

BADGE_TEMPLATE = {
    "id": "badge",
    "name": "Round badge",
    "width": 300,
    "height": 300,
    "layers": [
        {
            "id": "background",
            "type": "shape",
            "subtype": "circle",
            "position": {"x": "50%", "y": "50%"},
            "width": 280,
            "fill": "#1e3a8a",
            "stroke": "#facc15",
            "strokeWidth": 4,
        },
        {
            "id": "arc-guide",
            "type": "shape",
            "subtype": "path",
            "path": "M50,150 A100,100 0 0,1 250,150",
        },
        {
            "id": "curved-title",
            "type": "text",
            "text": "LAYOUT FORGE",
            "textPath": "arc-guide",
            "startOffset": "50%",
            "fontFamily": "Open Sans",
            "fontSize": 24,
            "fontColor": "#ffffff",
        },
        {
            "id": "label",
            "type": "text",
            "text": "Est. 2024",
            "position": {"x": "50%", "y": "80%"},
            "fontFamily": "Roboto",
            "fontSize": 18,
            "fontColor": "#ffffff",
        },
        {
            "id": "emblem",
            "type": "svgImage",
            "position": {"x": "50%", "y": "50%"},
            "width": 48,
            "height": 48,
            "svgContent": ARROW_SVG,
            "clip": "background",
            "fill": "#facc15",
        },
    ],
}


@pytest.fixture
def rect_template() -> Template:
    return Template.model_validate(copy.deepcopy(RECT_TEMPLATE))


@pytest.fixture
def badge_template() -> Template:
    return Template.model_validate(copy.deepcopy(BADGE_TEMPLATE))


@pytest.fixture
def space() -> ViewBox:
    return SPACE_400x300
