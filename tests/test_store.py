"""Tests for the short-link store."""

import json

import pytest

from madlib_links.errors import (
    CorruptShortLinkError,
    InvalidShortenRequestError,
    ShortCodeExhaustedError,
)
from madlib_links.models import StateRecord
from madlib_links.store import ONE_YEAR_SECONDS, ShortLinkStore

from tests.helpers import ScriptedGenerator


class TestCreate:
    """Test short link creation."""

    async def test_create_and_expand(self, store, sample_record):
        code = await store.create("play", sample_record)

        assert len(code) == 6
        record = await store.expand(code)
        assert record.mode == "play"
        assert record.data == sample_record
        assert record.created

    async def test_create_accepts_plain_dict(self, store):
        code = await store.create("edit", {"title": "T", "story": "s", "unknown": 1})
        record = await store.expand(code)
        assert record.data == StateRecord(title="T", story="s")

    @pytest.mark.parametrize("mode", ["", "creator", "PLAY", None])
    async def test_invalid_mode(self, store, sample_record, mode):
        with pytest.raises(InvalidShortenRequestError):
            await store.create(mode, sample_record)

    async def test_invalid_data(self, store):
        with pytest.raises(InvalidShortenRequestError, match="Invalid madlib data"):
            await store.create("play", {"placeholders": "nope"})

    async def test_codes_are_unique(self, kv, logger):
        store = ShortLinkStore(kv=kv, logger=logger)
        codes = [await store.create("play", StateRecord(story=str(i))) for i in range(50)]
        assert len(set(codes)) == 50
        assert len(kv) == 50

    async def test_collision_retries(self, kv, logger, sample_record):
        generator = ScriptedGenerator(["taken1", "taken1", "fresh1"])
        store = ShortLinkStore(kv=kv, short_code_generator=generator, logger=logger)

        first = await store.create("play", sample_record)
        second = await store.create("edit", StateRecord(story="other"))

        assert first == "taken1"
        assert second == "fresh1"
        assert generator.issued == ["taken1", "taken1", "fresh1"]
        # The first record was not overwritten
        assert (await store.expand("taken1")).data == sample_record

    async def test_exhaustion_persists_nothing(self, kv, logger):
        await kv.put("AAAAAA", json.dumps({"mode": "play", "data": {}}), 100)
        generator = ScriptedGenerator(["AAAAAA"] * 10 + ["free01"])
        store = ShortLinkStore(kv=kv, short_code_generator=generator, logger=logger)

        with pytest.raises(ShortCodeExhaustedError):
            await store.create("play", StateRecord(story="lost"))

        assert len(generator.issued) == 10
        assert len(kv) == 1
        assert await kv.get("free01") is None

    async def test_exhaustion_bound_is_configurable(self, kv, logger):
        await kv.put("AAAAAA", "{}", 100)
        generator = ScriptedGenerator(["AAAAAA"] * 3 + ["free01"])
        store = ShortLinkStore(kv=kv, short_code_generator=generator, logger=logger, max_attempts=3)

        with pytest.raises(ShortCodeExhaustedError):
            await store.create("play", StateRecord())
        assert len(generator.issued) == 3


class TestExpand:
    """Test short link expansion."""

    async def test_unknown_code(self, store):
        assert await store.expand("abc123") is None

    async def test_case_sensitive(self, kv, logger, sample_record):
        store = ShortLinkStore(kv=kv, short_code_generator=ScriptedGenerator(["AbCdEf"]), logger=logger)
        await store.create("play", sample_record)

        assert await store.expand("AbCdEf") is not None
        assert await store.expand("abcdef") is None
        assert await store.expand("ABCDEF") is None

    @pytest.mark.parametrize("code", ["", "abc", "abc12345", "../x12", "ab cd1"])
    async def test_malformed_code(self, store, code):
        assert await store.expand(code) is None

    async def test_expired_record(self, store, clock, sample_record):
        code = await store.create("story", sample_record)

        clock.advance(ONE_YEAR_SECONDS - 1)
        assert await store.expand(code) is not None

        clock.advance(1)
        assert await store.expand(code) is None

    async def test_corrupt_record(self, kv, store):
        await kv.put("bad001", "{not json", 100)
        with pytest.raises(CorruptShortLinkError):
            await store.expand("bad001")

    async def test_stored_record_with_unknown_mode(self, kv, store):
        await kv.put("bad002", json.dumps({"mode": "creator", "data": {}}), 100)
        with pytest.raises(CorruptShortLinkError):
            await store.expand("bad002")


async def test_health_check(store):
    assert await store.health_check() is True
