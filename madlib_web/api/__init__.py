"""HTTP API for short links."""

from .routes import router as api_router
from .routes import link_router

__all__ = ["api_router", "link_router"]
