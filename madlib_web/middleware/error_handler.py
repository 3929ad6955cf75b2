"""Exception handlers returning ``{"error": ...}`` bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from madlib_links.errors import InvalidShortenRequestError, MadlibLinkError
from ..api.routes import error_response

logger = logging.getLogger("madlib_links.web")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            InvalidShortenRequestError.default_error,
        )

    @app.exception_handler(MadlibLinkError)
    async def madlib_error_handler(request: Request, exc: MadlibLinkError):
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return error_response(exc.status_code, exc.error)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))
