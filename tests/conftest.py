"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

import httpx

from config import Config
from madlib_links.codec import StateCodec
from madlib_links.database.memory import MemoryKeyValueStore
from madlib_links.models import Placeholder, StateRecord, Theme
from madlib_links.shortcode import ShortCodeGenerator
from madlib_links.store import ShortLinkStore
from madlib_links.common.logging_config import setup_logging
from madlib_web import create_app

from tests.helpers import FakeClock


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv(clock, logger):
    """In-memory key-value backend driven by the fake clock."""
    return MemoryKeyValueStore(clock=clock, logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def store(kv, short_code_generator, logger) -> ShortLinkStore:
    """Create short-link store."""
    return ShortLinkStore(
        kv=kv,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def codec(logger):
    return StateCodec(logger=logger)


@pytest.fixture
def sample_record():
    """A complete madlib."""
    return StateRecord(
        title="The Zoo",
        subtitle="A day out",
        placeholders=[
            Placeholder(id="word01", label="noun"),
            Placeholder(id="word02", label="verb (past tense)"),
        ],
        story="A {word01} {word02} past the café. ✨",
        theme=Theme(background="#0a1929", text="#b8d4e3", button="#1a4f6e", highlight="#4fc3f7"),
    )


@pytest.fixture
def config(tmp_path):
    return Config(
        _env_file=None,
        app_url="https://madlibs.example.com/",
        draft_path=str(tmp_path / "draft.json"),
    )


@pytest.fixture
def app(store, config, logger):
    """Create test FastAPI app."""
    return create_app(store_instance=store, config=config, logger=logger)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
