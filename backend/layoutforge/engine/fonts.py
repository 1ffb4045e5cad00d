"""Font family lookup and web-font import declarations.

Fetching and embedding font files is an external concern; the engine only
names the family on text elements and, optionally, emits plain ``@import``
statements that a downstream exporter can resolve.
"""

from __future__ import annotations

from typing import Protocol

from layoutforge.engine.config import DEFAULT_CONFIG
from layoutforge.models.template import FontDescriptor, LayerOverride


class FontLookup(Protocol):
    """Collaborator returning a display family name for a descriptor or a plain name."""

    def __call__(self, font: FontDescriptor | str) -> str | None: ...


def extract_font_family(override: LayerOverride | None, lookup: FontLookup | None = None) -> str | None:
    """Family chosen in an override: structured ``font`` first, then ``font_family``."""
    if override is None:
        return None
    if override.font is not None:
        if lookup is not None:
            return lookup(override.font) or override.font.family
        return override.font.family
    if override.font_family:
        if lookup is not None:
            return lookup(override.font_family) or override.font_family
        return override.font_family
    return None


def primary_family(css_family: str) -> str:
    """First family of a CSS font stack, unquoted: '"Open Sans", sans-serif' → 'Open Sans'."""
    return css_family.split(",")[0].strip().strip("'\"").strip()


def font_import_url(family: str, template: str = DEFAULT_CONFIG.font_import_url) -> str:
    return template.format(family=primary_family(family).replace(" ", "+"))


def font_import_rule(family: str, template: str = DEFAULT_CONFIG.font_import_url) -> str:
    return f"@import url('{font_import_url(family, template)}');"


def font_style_block(families: list[str], template: str = DEFAULT_CONFIG.font_import_url) -> str:
    """<style> definition importing each family once, in first-seen order; "" when none.

    Rules sit in a CDATA section: import URLs carry query strings with `&`.
    """
    unique = list(dict.fromkeys(primary_family(f) for f in families if f and primary_family(f)))
    if not unique:
        return ""
    rules = "\n".join(f"  {font_import_rule(f, template)}" for f in unique)
    return f"<style><![CDATA[\n{rules}\n]]></style>"
