"""Tests for the fragment codec."""

import base64
import json
import re
import zlib

from madlib_links.codec import StateCodec
from madlib_links.models import UNSET, Placeholder, StateRecord, Theme


def _token_for(payload: bytes) -> str:
    return base64.urlsafe_b64encode(zlib.compress(payload)).decode("ascii").rstrip("=")


class TestEncode:
    """Test encoding."""

    def test_token_is_fragment_safe(self, codec, sample_record):
        token = codec.encode(sample_record)
        assert token
        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)

    def test_unserializable_answer_returns_none(self, codec):
        record = StateRecord(story="x", answers={"word01": object()})
        assert codec.encode(record) is None

    def test_theme_uses_short_background_key(self, codec, sample_record):
        token = codec.encode(sample_record)
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
        data = json.loads(zlib.decompress(raw))
        assert data["theme"]["bg"] == "#0a1929"
        assert "background" not in data["theme"]


class TestRoundTrip:
    """decode(encode(r)) == r."""

    def test_full_record(self, codec, sample_record):
        assert codec.decode(codec.encode(sample_record)) == sample_record

    def test_record_with_answers(self, codec, sample_record):
        record = sample_record.copy(answers={"word01": "giraffe", "word99": "orphan"})
        assert codec.decode(codec.encode(record)) == record

    def test_partial_record_stays_partial(self, codec):
        record = StateRecord(story="hi {word01}")
        decoded = codec.decode(codec.encode(record))
        assert decoded == record
        assert decoded.title is UNSET
        assert decoded.present_fields() == ["story"]

    def test_empty_strings_are_kept(self, codec):
        record = StateRecord(title="", subtitle="", placeholders=[], story="")
        decoded = codec.decode(codec.encode(record))
        assert decoded.title == ""
        assert decoded.placeholders == []

    def test_defaults_for_missing_fields(self, codec):
        decoded = codec.decode(codec.encode(StateRecord(title="T")))
        filled = decoded.with_defaults()
        assert filled.title == "T"
        assert filled.subtitle == ""
        assert filled.placeholders == []
        assert filled.story == ""
        assert filled.theme is None
        assert filled.answers is None

    def test_partial_theme_survives(self, codec):
        record = StateRecord(theme=Theme(background="#000000", text="#ffffff"))
        decoded = codec.decode(codec.encode(record))
        assert decoded.theme == record.theme
        assert not decoded.theme.is_complete()


class TestDecode:
    """Decoding untrusted tokens."""

    def test_unknown_fields_ignored(self, codec):
        payload = json.dumps({"title": "T", "story": "s", "extra": [1, 2], "v": 3}).encode()
        decoded = codec.decode(_token_for(payload))
        assert decoded == StateRecord(title="T", story="s")

    def test_background_key_accepted(self, codec):
        theme = {"background": "#1", "text": "#2", "button": "#3", "highlight": "#4"}
        decoded = codec.decode(_token_for(json.dumps({"theme": theme}).encode()))
        assert decoded.theme == Theme(background="#1", text="#2", button="#3", highlight="#4")

    def test_garbage_returns_none(self, codec):
        assert codec.decode("not a token!") is None
        assert codec.decode("abc") is None
        assert codec.decode("") is None
        assert codec.decode(None) is None

    def test_valid_base64_but_not_zlib(self, codec):
        token = base64.urlsafe_b64encode(b"hello world").decode().rstrip("=")
        assert codec.decode(token) is None

    def test_not_json(self, codec):
        assert codec.decode(_token_for(b"{not json")) is None

    def test_non_object_json(self, codec):
        assert codec.decode(_token_for(b"[1, 2, 3]")) is None
        assert codec.decode(_token_for(b'"just a string"')) is None
        assert codec.decode(_token_for(b"null")) is None

    def test_wrong_field_types(self, codec):
        assert codec.decode(_token_for(b'{"title": 5}')) is None
        assert codec.decode(_token_for(b'{"placeholders": "word01"}')) is None
        assert codec.decode(_token_for(b'{"answers": ["a"]}')) is None

    def test_duplicate_placeholder_ids(self, codec):
        payload = json.dumps({
            "placeholders": [{"id": "word01", "label": "noun"}, {"id": "word01", "label": "verb"}],
        }).encode()
        assert codec.decode(_token_for(payload)) is None

    def test_truncated_token(self, codec, sample_record):
        token = codec.encode(sample_record)
        assert codec.decode(token[: len(token) // 2]) is None

    def test_oversized_payload_rejected(self, logger):
        codec = StateCodec(logger=logger, max_decoded_bytes=64)
        record = StateRecord(story="x" * 1000)
        assert codec.decode(codec.encode(record)) is None

    def test_invalid_utf8(self, codec):
        assert codec.decode(_token_for(b"\xff\xfe{}")) is None

    def test_deeply_nested_json(self, codec):
        assert codec.decode(_token_for(b"[" * 100000 + b"]" * 100000)) is None

    def test_deeply_nested_field(self, codec):
        payload = b'{"title": ' + b"[" * 100000 + b"]" * 100000 + b"}"
        assert codec.decode(_token_for(payload)) is None


def test_placeholders_keep_order(codec):
    placeholders = [Placeholder(id=f"word{n:02d}", label=f"label {n}") for n in (3, 1, 2)]
    decoded = codec.decode(codec.encode(StateRecord(placeholders=placeholders)))
    assert [p.id for p in decoded.placeholders] == ["word03", "word01", "word02"]
