"""Response headers and public URL helpers for the short-link API."""

from typing import Optional
from urllib.parse import urlsplit


# Sent on every API response and on preflight answers
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def request_origin(url: str) -> str:
    """``scheme://host[:port]`` of an absolute URL, without credentials or path."""
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


def public_base_url(request_url: str, configured_base_url: Optional[str] = None) -> str:
    """Base that short URLs are built on.

    A configured public URL wins; otherwise the origin the request came in
    on is used. Proxy headers are resolved by uvicorn before the request URL
    is built (see ``Config.forwarded_allow_ips``).
    """
    if configured_base_url and configured_base_url.strip():
        return configured_base_url.strip().rstrip("/")
    return request_origin(request_url)
