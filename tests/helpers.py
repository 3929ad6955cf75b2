"""Test doubles shared across test modules."""

from typing import Iterable

from madlib_links.shortcode import ShortCodeGenerator


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedGenerator(ShortCodeGenerator):
    """Returns pre-set codes, then falls back to random ones."""

    def __init__(self, codes: Iterable[str], default_length: int = 6):
        super().__init__(default_length=default_length)
        self.codes = list(codes)
        self.issued = []

    def generate_random(self, length=None) -> str:
        code = self.codes.pop(0) if self.codes else super().generate_random(length)
        self.issued.append(code)
        return code


class RecordingShortener:
    """Short-link backend double that records calls and can be told to fail."""

    def __init__(self, code: str = "aB3xY9", fail_with: Exception = None, records=None):
        self.code = code
        self.fail_with = fail_with
        self.records = records or {}
        self.created = []
        self.expanded = []

    async def create(self, mode, data):
        self.created.append((mode, data))
        if self.fail_with is not None:
            raise self.fail_with
        return self.code

    async def expand(self, short_code):
        self.expanded.append(short_code)
        if self.fail_with is not None:
            raise self.fail_with
        return self.records.get(short_code)
