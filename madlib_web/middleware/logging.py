"""Request logging middleware."""

import logging
import time
from typing import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from madlib_links.common.logging_config import component_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with its status and duration.

    Server errors are logged at ERROR. Requests to ``quiet_paths`` (the health
    probe by default) are logged at DEBUG.
    """

    def __init__(
        self,
        app,
        logger: logging.Logger = None,
        quiet_paths: Iterable[str] = ("/api/health",),
    ):
        super().__init__(app)
        self.logger = logger or component_logger("web")
        self.quiet_paths = frozenset(quiet_paths)

    def _level_for(self, path: str, status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if path in self.quiet_paths:
            return logging.DEBUG
        return logging.INFO

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self.logger.exception(f"{request.method} {path} raised after {elapsed_ms:.1f}ms")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.log(
            self._level_for(path, response.status_code),
            f"{request.method} {path} -> {response.status_code} ({elapsed_ms:.1f}ms)",
        )
        return response
