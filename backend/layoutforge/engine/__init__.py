"""LayoutForge template layout and rendering engine.

Entry point is ``layoutforge.engine.assembler.render_document``. Only the
leaf value types are re-exported here; the data models import them.
"""

from layoutforge.engine.config import DEFAULT_CONFIG, RenderConfig
from layoutforge.engine.context import Bounds, CentroidResult, PathAnalysis, Point

__all__ = [
    "DEFAULT_CONFIG",
    "RenderConfig",
    "Bounds",
    "CentroidResult",
    "PathAnalysis",
    "Point",
]
