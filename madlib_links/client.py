"""HTTP client for the short-link API."""

import logging
from typing import Optional

import httpx

from .errors import ShortenerError, ShortenerUnavailableError
from .models import ShortLinkRecord, StateRecord


class ShortenerClient:
    """Talks to ``POST /shorten`` and ``GET /<code>`` of a short-link service.

    ``create`` and ``expand`` mirror :class:`~madlib_links.store.ShortLinkStore`,
    so a resolver can use either one.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL of the short-link service
            timeout: Request timeout in seconds
            logger: Optional logger
            transport: Optional httpx transport (tests mount the ASGI app here)
        """
        self.api_url = api_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
        )

    async def create(self, mode: str, data: StateRecord) -> str:
        """Ask the service to store ``data`` and return the new short code.

        Raises:
            ShortenerUnavailableError: If the service cannot be reached
            ShortenerError: If the service rejects the request
        """
        try:
            response = await self._client.post(
                "/shorten",
                json={"mode": mode, "data": data.to_dict()},
            )
        except httpx.HTTPError as e:
            self.logger.error(f"Error creating short URL: {e}")
            raise ShortenerUnavailableError(str(e))

        if response.status_code != 200:
            error = _error_field(response)
            self.logger.error(f"Failed to create short URL: {response.status_code} {error}")
            raise ShortenerError(error, status=response.status_code)

        try:
            short_code = response.json()["shortCode"]
        except (ValueError, KeyError, TypeError) as e:
            raise ShortenerError(f"Malformed shorten response: {e}", status=response.status_code)
        if not isinstance(short_code, str) or not short_code:
            raise ShortenerError("Malformed shorten response: empty shortCode", status=response.status_code)
        return short_code

    async def expand(self, short_code: str) -> Optional[ShortLinkRecord]:
        """Fetch the record stored under ``short_code``.

        Returns:
            The record, or None when the service answers 404

        Raises:
            ShortenerUnavailableError: If the service cannot be reached
            ShortenerError: For any other non-200 answer or a malformed body
        """
        try:
            response = await self._client.get(f"/{short_code}")
        except httpx.HTTPError as e:
            self.logger.error(f"Error expanding short URL: {e}")
            raise ShortenerUnavailableError(str(e))

        if response.status_code == 404:
            self.logger.warning(f"Short code not found: {short_code}")
            return None

        if response.status_code != 200:
            error = _error_field(response)
            self.logger.error(f"Failed to expand short URL: {response.status_code} {error}")
            raise ShortenerError(error, status=response.status_code)

        try:
            return ShortLinkRecord.from_dict(response.json())
        except ValueError as e:
            raise ShortenerError(f"Malformed expand response: {e}", status=response.status_code)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ShortenerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def _error_field(response: httpx.Response) -> str:
    """The ``error`` string of a JSON error body, or the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.reason_phrase
