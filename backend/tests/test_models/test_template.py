"""Tests for template document validation."""

import copy

import pytest
from pydantic import ValidationError

from tests.conftest import BADGE_TEMPLATE, RECT_TEMPLATE

from layoutforge.models.template import (
    IconLayer,
    LayerOverride,
    LinePosition,
    Position,
    ShapeLayer,
    Template,
    TextLayer,
    ViewBox,
)


def test_badge_layers_discriminated_by_type():
    template = Template.model_validate(copy.deepcopy(BADGE_TEMPLATE))
    kinds = [type(layer) for layer in template.layers]
    assert kinds == [ShapeLayer, ShapeLayer, TextLayer, TextLayer, IconLayer]


def test_camel_case_aliases():
    template = Template.model_validate(copy.deepcopy(BADGE_TEMPLATE))
    background = template.get_layer("background")
    assert background.stroke_width == 4
    title = template.get_layer("curved-title")
    assert title.text_path == "arc-guide"
    assert title.start_offset == "50%"
    assert title.font_family == "Open Sans"
    emblem = template.get_layer("emblem")
    assert emblem.svg_content.lstrip().startswith("<?xml")
    assert emblem.color == "#facc15"


def test_text_accepts_default_field():
    layer = TextLayer.model_validate({"id": "t", "default": "Hello"})
    assert layer.text == "Hello"
    assert layer.position == Position(x="50%", y="50%")


def test_icon_color_aliases():
    raw = IconLayer.model_validate({"id": "i", "width": 10, "height": 10, "fill": "#111", "stroke": "#222"})
    processed = IconLayer.model_validate(
        {"id": "i", "width": 10, "height": 10, "color": "#111", "strokeColor": "#222"}
    )
    assert raw.color == processed.color == "#111"
    assert raw.stroke_color == processed.stroke_color == "#222"


def test_line_shape_takes_endpoints():
    layer = ShapeLayer.model_validate(
        {"id": "l", "subtype": "line", "position": {"x1": 0, "y1": "10%", "x2": 100, "y2": "10%"}}
    )
    assert isinstance(layer.position, LinePosition)


def test_unknown_layer_type_rejected():
    with pytest.raises(ValidationError):
        Template.model_validate({"width": 10, "height": 10, "layers": [{"id": "x", "type": "video"}]})


def test_duplicate_layer_ids_rejected():
    data = copy.deepcopy(RECT_TEMPLATE)
    data["layers"].append(copy.deepcopy(data["layers"][0]))
    with pytest.raises(ValidationError, match="duplicate layer id"):
        Template.model_validate(data)


def test_coordinate_space_required():
    with pytest.raises(ValidationError, match="width and height"):
        Template.model_validate({"width": 100, "layers": []})


@pytest.mark.parametrize(
    "view_box",
    [
        {"x": 0, "y": 0, "width": 0, "height": 10},
        {"x": 0, "y": 0, "width": 10, "height": -1},
        {"x": 0, "y": 0, "width": float("inf"), "height": 10},
    ],
)
def test_invalid_view_box_rejected(view_box):
    with pytest.raises(ValidationError):
        Template.model_validate({"viewBox": view_box, "layers": []})


def test_dimensions_win_over_view_box():
    template = Template.model_validate(
        {"width": 200, "height": 100, "viewBox": {"x": 5, "y": 5, "width": 10, "height": 10}}
    )
    assert template.coordinate_space == ViewBox(x=0, y=0, width=200, height=100)


def test_view_box_used_without_dimensions():
    template = Template.model_validate({"viewBox": {"x": -5, "y": 0, "width": 10, "height": 20}})
    assert template.coordinate_space.to_attr() == "-5 0 10 20"


def test_non_positive_scale_rejected():
    with pytest.raises(ValidationError):
        ShapeLayer.model_validate({"id": "s", "subtype": "rect", "scale": 0})
    with pytest.raises(ValidationError):
        LayerOverride(scale=-1)


def test_get_layer_missing():
    template = Template.model_validate(copy.deepcopy(RECT_TEMPLATE))
    assert template.get_layer("box").subtype == "rect"
    assert template.get_layer("nope") is None


def test_override_aliases():
    override = LayerOverride.model_validate({"fillColor": "#0f0", "fontFamily": "Lato", "strokeOpacity": 0.5})
    assert override.fill_color == "#0f0"
    assert override.font_family == "Lato"
    assert override.stroke_opacity == 0.5


def test_coordinate_space_missing_on_unvalidated_template():
    template = Template.model_construct(layers=[])
    with pytest.raises(ValueError, match="coordinate space"):
        template.coordinate_space
