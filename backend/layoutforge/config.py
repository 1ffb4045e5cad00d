"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from layoutforge.engine.config import DEFAULT_CONFIG, RenderConfig


class Settings(BaseSettings):
    layoutforge_env: str = "development"
    layoutforge_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Web font @import template; {family} gets the '+'-joined family name
    font_import_url: str = DEFAULT_CONFIG.font_import_url
    embed_font_imports: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def render_config(self) -> RenderConfig:
        return RenderConfig(
            font_import_url=self.font_import_url,
            include_font_imports=self.embed_font_imports,
        )


settings = Settings()
