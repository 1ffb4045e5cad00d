"""Tests for API endpoints."""

from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from layoutforge.main import app
from tests.conftest import ARROW_SVG, BADGE_TEMPLATE, CIRCLE_SVG, RECT_TEMPLATE, TRIANGLE_PATH


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "path" in data["shape_subtypes"]
    assert isinstance(data["font_imports"], bool)


def test_render_returns_svg_document():
    response = client.post("/api/render", json={"template": RECT_TEMPLATE})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith('<?xml version="1.0"')
    assert 'd="M100,100 L300,100 L300,200 L100,200 Z"' in response.text


def test_render_applies_overrides():
    response = client.post(
        "/api/render",
        json={"template": RECT_TEMPLATE, "overrides": {"box": {"fillColor": "#00ff00"}}},
    )
    assert response.status_code == 200
    assert 'fill="#00ff00"' in response.text
    assert "#ff0000" not in response.text


def test_render_json():
    response = client.post(
        "/api/render/json",
        json={"template": copy.deepcopy(BADGE_TEMPLATE), "font_imports": False},
    )
    assert response.status_code == 200
    data = response.json()
    # The guide path paints nothing and produces no layer group
    assert data["layer_count"] == 4
    assert data["processing_time_ms"] >= 0
    assert "@import" not in data["svg"]
    assert 'id="arc-guide"' in data["svg"]


def test_render_invalid_template():
    bad = copy.deepcopy(RECT_TEMPLATE)
    del bad["width"]
    response = client.post("/api/render", json={"template": bad})
    assert response.status_code == 422


def test_centroid_from_markup():
    response = client.post("/api/centroid", json={"svg": CIRCLE_SVG})
    assert response.status_code == 200
    data = response.json()
    assert data["shape_kind"] == "circle"
    assert data["confidence"] == pytest.approx(0.9)
    assert data["transform_origin"] == {"x": 12.0, "y": 12.0}


def test_centroid_reports_bounds_confidence():
    data = client.post("/api/centroid", json={"svg": ARROW_SVG}).json()
    assert data["shape_kind"] == "complex-path"
    assert data["bounds_confidence"] == pytest.approx(1.0)


def test_centroid_from_paths():
    response = client.post("/api/centroid", json={"paths": [TRIANGLE_PATH], "polygon": True})
    assert response.status_code == 200
    data = response.json()
    assert data["use_centroid"] is True
    assert data["bounding_box_center"] == {"x": 5.0, "y": 5.0}
    assert data["centroid_center"]["x"] == pytest.approx(10 / 3)
    assert data["transform_origin"]["y"] == pytest.approx(10 / 3)
    assert data["bounds_confidence"] is None


def test_centroid_requires_input():
    response = client.post("/api/centroid", json={})
    assert response.status_code == 422


def test_resolve_point():
    response = client.post(
        "/api/resolve",
        json={"position": {"x": "25%", "y": 30}, "viewBox": {"x": 0, "y": 0, "width": 400, "height": 300}},
    )
    assert response.status_code == 200
    assert response.json() == {"x": 100.0, "y": 30.0}


def test_resolve_line():
    response = client.post(
        "/api/resolve",
        json={
            "position": {"x1": "0%", "y1": "50%", "x2": "100%", "y2": "50%"},
            "viewBox": {"x": 10, "y": 0, "width": 200, "height": 100},
        },
    )
    assert response.status_code == 200
    assert response.json() == {"x1": 10.0, "y1": 50.0, "x2": 210.0, "y2": 50.0}
