"""URL building utilities for madlib short links."""

from urllib.parse import urldefrag


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build the API URL that expands a short code.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"


def build_fragment_url(base_url: str, key: str, value: str) -> str:
    """Build ``<base>#<key>=<value>``, replacing any fragment already on the base.

    Args:
        base_url: Page URL of the madlib app
        key: Fragment key (``s``, ``play``, ``edit`` or ``story``)
        value: Short code or encoded token

    Returns:
        Share URL
    """
    base, _ = urldefrag(base_url)
    return f"{base}#{key}={value}"


def extract_fragment(url_or_fragment: str) -> str:
    """Return the fragment (without ``#``) of a URL or a bare fragment.

    A value without ``#`` that looks like a URL has no fragment; any other
    value is taken to be a fragment already.
    """
    if not url_or_fragment:
        return ""
    if "#" in url_or_fragment:
        return url_or_fragment.split("#", 1)[1]
    if "://" in url_or_fragment:
        return ""
    return url_or_fragment
