"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ExpandResponse,
    HealthResponse,
    ErrorResponse,
)
from madlib_links.common.url_builder import build_short_url
from madlib_links.common.headers import public_base_url
from madlib_links.errors import InvalidShortenRequestError, ShortCodeExhaustedError

router = APIRouter()
link_router = APIRouter()


def error_response(status_code: int, error: str, message: str = None) -> JSONResponse:
    """JSON error body: always ``error``, ``message`` only when given."""
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@link_router.get("/", summary="Service description")
async def service_info():
    """Describe the available endpoints."""
    return {
        "service": "Madlib Maker URL Shortener",
        "endpoints": {
            "POST /shorten": 'Create shortened URL (body: {mode: "play"|"edit"|"story", data: {...}})',
            "GET /:shortCode": "Expand shortened URL",
        },
    }


@link_router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Code generation exhausted or internal error"},
    },
    summary="Create short link",
    description="Store a madlib and return a short code for it.",
)
async def shorten(request: Request, body: ShortenRequest):
    """Store a madlib under a new short code."""
    store = request.app.state.store
    config = request.app.state.config
    logger = request.app.state.logger

    try:
        short_code = await store.create(body.mode, body.data)
    except InvalidShortenRequestError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.error, e.message)
    except ShortCodeExhaustedError as e:
        logger.error(f"Short code generation exhausted: {e.message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.error)
    except Exception as e:
        logger.exception("Failed to create short link")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to process request",
            str(e),
        )

    base_url = public_base_url(str(request.url), config.base_url)

    return ShortenResponse(
        shortCode=short_code,
        url=build_short_url(
            short_code=short_code,
            base_url=base_url,
            path_prefix=config.path_prefix,
        ),
    )


@link_router.get(
    "/{short_code}",
    response_model=ExpandResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Expand short link",
    description="Return the mode and madlib stored under a short code.",
)
async def expand(request: Request, short_code: str):
    """Expand a short code."""
    store = request.app.state.store
    logger = request.app.state.logger

    try:
        record = await store.expand(short_code)
    except Exception as e:
        logger.exception(f"Failed to expand short code {short_code}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to expand short code",
            str(e),
        )

    if record is None:
        return error_response(status.HTTP_404_NOT_FOUND, "Short code not found")

    return ExpandResponse(mode=record.mode, data=record.data.to_dict())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    store = request.app.state.store

    healthy = await store.health_check()
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        store="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
    if healthy:
        return body
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
