"""Write the final SVG document from a coordinate space, definitions and layer fragments."""

from __future__ import annotations

import math


def fmt_num(value: float, precision: int = 6) -> str:
    """Compact number formatting for path data and attributes: 200.0 → "200", 0.25 → "0.25"."""
    if not math.isfinite(value):
        return "0"
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def escape_xml(text: str) -> str:
    """Escape XML special characters in text content and attribute values."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def format_attrs(attrs: dict[str, object]) -> str:
    """Render attributes in insertion order, dropping None values; strings are escaped."""
    parts = []
    for key, value in attrs.items():
        if value is None:
            continue
        if isinstance(value, float):
            value = fmt_num(value)
        elif isinstance(value, str):
            value = escape_xml(value)
        parts.append(f'{key}="{value}"')
    return " ".join(parts)


def indent(markup: str, levels: int = 1) -> str:
    pad = "  " * levels
    return "\n".join(pad + line if line.strip() else line for line in markup.splitlines())


def serialize_document(
    view_box_attr: str,
    definitions: list[str],
    fragments: list[str],
    title: str = "",
) -> str:
    """Assemble a self-contained SVG document.

    Order is fixed: XML declaration, root element, one <defs> block, then the
    layer fragments exactly in the order given (paint order).
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box_attr}">',
    ]

    if title:
        lines.append(f"  <title>{title}</title>")

    if definitions:
        lines.append("  <defs>")
        for definition in definitions:
            lines.append(indent(definition, 2))
        lines.append("  </defs>")
    else:
        lines.append("  <defs />")

    for fragment in fragments:
        lines.append(indent(fragment, 1))

    lines.append("</svg>")
    return "\n".join(lines)
