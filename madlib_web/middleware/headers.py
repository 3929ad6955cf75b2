"""CORS headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable

from madlib_links.common.headers import CORS_HEADERS


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Answer every OPTIONS request with 204 and add CORS headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Short-circuit preflight requests, decorate everything else."""
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
