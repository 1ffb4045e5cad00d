"""FastAPI dependency injection."""

from __future__ import annotations

from layoutforge.config import Settings, settings
from layoutforge.engine.config import RenderConfig


def get_settings() -> Settings:
    return settings


def get_render_config() -> RenderConfig:
    return settings.render_config()
