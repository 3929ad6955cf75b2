"""Validation utilities for madlib short links."""

import re
from urllib.parse import urlparse
from typing import Any, Optional, Tuple

from ..models import LINK_MODES


PLACEHOLDER_ID_RE = re.compile(r"^word(\d{2,})$")


def is_valid_base_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute http(s) URL used as a link base.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_mode(mode: Any) -> Tuple[bool, str]:
    """Validate a link mode.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not mode or not isinstance(mode, str):
        return False, "Mode is required"

    if mode not in LINK_MODES:
        return False, f"Mode must be one of {', '.join(LINK_MODES)}"

    return True, ""


def is_valid_short_code(short_code: Any, length: int = 6) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        short_code: The short code to validate
        length: Exact length of generated codes

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) != length:
        return False, f"Short code must be exactly {length} characters"

    if not re.fullmatch(r'[a-zA-Z0-9]+', short_code):
        return False, "Short code can only contain letters and numbers"

    return True, ""


def placeholder_number(placeholder_id: str) -> Optional[int]:
    """Number N of a ``word<N>`` placeholder id, or None for other ids."""
    match = PLACEHOLDER_ID_RE.match(placeholder_id)
    return int(match.group(1)) if match else None
