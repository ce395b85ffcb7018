"""
API Routes

FastAPI routers for Toonpack endpoints.
"""

from toonpack.routes.health import router as health_router
from toonpack.routes.packs import router as packs_router
from toonpack.routes.references import router as references_router
from toonpack.routes.stickers import router as stickers_router

__all__ = ["health_router", "packs_router", "references_router", "stickers_router"]
