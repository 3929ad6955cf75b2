"""Common utilities for madlib short links."""

from .validators import is_valid_base_url, is_valid_mode, is_valid_short_code, placeholder_number
from .headers import CORS_HEADERS, request_origin, public_base_url
from .url_builder import build_short_url, build_fragment_url, extract_fragment
from .logging_config import COMPONENT_LOGGERS, component_logger, setup_logging

__all__ = [
    "is_valid_base_url",
    "is_valid_mode",
    "is_valid_short_code",
    "placeholder_number",
    "CORS_HEADERS",
    "request_origin",
    "public_base_url",
    "build_short_url",
    "build_fragment_url",
    "extract_fragment",
    "COMPONENT_LOGGERS",
    "component_logger",
    "setup_logging",
]
