"""Multi-line text layout: split on newlines and center the block vertically with tspan dy offsets."""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def line_dy(index: int, total_lines: int, font_size: float, line_height: float) -> float:
    """dy of one <tspan>.

    The first line moves up by half the block so the block center sits on
    the anchor; every later line moves down by one line spacing.
    For 3 lines at font_size=24, line_height=1.2: -28.8, 28.8, 28.8.
    """
    spacing = font_size * line_height
    if index == 0:
        return -(total_lines - 1) * spacing / 2
    return spacing
