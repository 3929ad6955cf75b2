"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from .api import api_router, link_router
from .middleware.headers import CORSHeadersMiddleware
from .middleware.logging import LoggingMiddleware
from .middleware.error_handler import setup_exception_handlers


def create_app(
    store_instance,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: ShortLinkStore instance (may be set later in lifespan)
        config: Configuration instance
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Madlib Maker URL Shortener",
        description="Short links for shared madlibs",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("madlib_links")

    # Last added runs first: CORS wraps logging so preflights are answered immediately
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    setup_exception_handlers(app)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(link_router, tags=["Links"])

    return app
