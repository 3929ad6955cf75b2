"""Middleware for the short-link web app."""

from .headers import CORSHeadersMiddleware
from .logging import LoggingMiddleware
from .error_handler import setup_exception_handlers

__all__ = ["CORSHeadersMiddleware", "LoggingMiddleware", "setup_exception_handlers"]
