"""Tests for multi-line layout and font family helpers."""

import pytest

from layoutforge.engine.fonts import (
    extract_font_family,
    font_import_rule,
    font_import_url,
    font_style_block,
    primary_family,
)
from layoutforge.engine.text import line_dy, split_lines
from layoutforge.models.template import LayerOverride


def test_split_lines():
    assert split_lines("a\nb\n") == ["a", "b", ""]
    assert split_lines("single") == ["single"]


def test_line_dy_centers_block():
    assert line_dy(0, 3, 24, 1.2) == pytest.approx(-28.8)
    assert line_dy(1, 3, 24, 1.2) == pytest.approx(28.8)
    assert line_dy(2, 3, 24, 1.2) == pytest.approx(28.8)
    assert line_dy(0, 1, 24, 1.2) == 0


def test_extract_font_family_priority():
    assert extract_font_family(None) is None
    assert extract_font_family(LayerOverride()) is None
    assert extract_font_family(LayerOverride(font_family="Inter")) == "Inter"
    assert extract_font_family(LayerOverride(font={"family": "Lato", "name": "Lato"}, font_family="Inter")) == "Lato"


def test_extract_font_family_lookup_falls_back_to_name():
    override = LayerOverride(font_family="Inter")
    assert extract_font_family(override, lambda font: None) == "Inter"
    assert extract_font_family(override, lambda font: f"{font} Variable") == "Inter Variable"


def test_primary_family():
    assert primary_family('"Open Sans", sans-serif') == "Open Sans"
    assert primary_family("Roboto") == "Roboto"


def test_font_import_url_and_rule():
    assert font_import_url("Open Sans") == (
        "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;600;700&display=swap"
    )
    assert font_import_rule("Lato", "https://fonts.example/{family}.css") == (
        "@import url('https://fonts.example/Lato.css');"
    )


def test_font_style_block_deduplicates():
    block = font_style_block(["Roboto", "Open Sans", "Roboto", ""])
    assert block.startswith("<style><![CDATA[")
    assert block.endswith("]]></style>")
    assert block.count("@import") == 2
    assert block.index("Roboto") < block.index("Open+Sans")
    assert font_style_block([]) == ""
