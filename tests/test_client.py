"""Tests for the short-link HTTP client."""

import httpx
import pytest

from madlib_links.client import ShortenerClient
from madlib_links.errors import ShortenerError, ShortenerUnavailableError
from madlib_links.models import StateRecord


@pytest.fixture
async def shortener(app, logger):
    """Client mounted directly on the ASGI app."""
    client = ShortenerClient(
        api_url="http://testserver",
        logger=logger,
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.close()


def _mock_client(handler, logger):
    return ShortenerClient(
        api_url="http://short.example.com",
        logger=logger,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
class TestShortenerClient:
    """Test the client against the real API."""

    async def test_create_and_expand(self, shortener, sample_record):
        code = await shortener.create("play", sample_record)

        record = await shortener.expand(code)
        assert record.mode == "play"
        assert record.data == sample_record

    async def test_expand_unknown(self, shortener):
        assert await shortener.expand("abc123") is None

    async def test_create_rejected(self, shortener):
        with pytest.raises(ShortenerError) as exc_info:
            await shortener.create("creator", StateRecord())
        assert exc_info.value.status == 400
        assert "Invalid request" in exc_info.value.message


@pytest.mark.asyncio
class TestShortenerFailures:
    """Test transport and protocol failures."""

    async def test_connection_error(self, logger):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler, logger) as client:
            with pytest.raises(ShortenerUnavailableError):
                await client.create("play", StateRecord())
            with pytest.raises(ShortenerUnavailableError):
                await client.expand("abc123")

    async def test_server_error(self, logger):
        def handler(request):
            return httpx.Response(500, json={"error": "Failed to expand short code"})

        async with _mock_client(handler, logger) as client:
            with pytest.raises(ShortenerError) as exc_info:
                await client.expand("abc123")
        assert exc_info.value.status == 500
        assert exc_info.value.message == "Failed to expand short code"

    async def test_malformed_bodies(self, logger):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(200, json={"code": "abc123"})
            return httpx.Response(200, text="<html>")

        async with _mock_client(handler, logger) as client:
            with pytest.raises(ShortenerError):
                await client.create("play", StateRecord())
            with pytest.raises(ShortenerError):
                await client.expand("abc123")

    async def test_request_shape(self, logger):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"shortCode": "aB3xY9", "url": "http://short.example.com/aB3xY9"})

        async with _mock_client(handler, logger) as client:
            code = await client.create("story", StateRecord(story="s", answers={"word01": "x"}))

        assert code == "aB3xY9"
        assert seen[0].url.path == "/shorten"
        assert seen[0].headers["content-type"] == "application/json"
