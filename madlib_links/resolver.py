"""Building share links and resolving incoming ones."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .codec import StateCodec
from .common.url_builder import build_fragment_url, extract_fragment
from .common.validators import is_valid_base_url, is_valid_mode, is_valid_short_code
from .models import CREATOR, LINK_MODES, ShortLinkRecord, StateRecord


SHORT_KEY = "s"

# Failure reasons reported on ResolveResult
NOT_FOUND = "not_found"
UNAVAILABLE = "unavailable"
INVALID_CODE = "invalid_code"
INVALID_RECORD = "invalid_record"
DECODE_FAILED = "decode_failed"
APPLY_FAILED = "apply_failed"


class ShortLinkBackend(Protocol):
    """Anything that can create and expand short codes."""

    async def create(self, mode: str, data: StateRecord) -> str: ...

    async def expand(self, short_code: str) -> Optional[ShortLinkRecord]: ...


@dataclass
class ResolveResult:
    """Outcome of resolving a URL fragment."""

    mode: str = CREATOR
    loaded: bool = False
    data: Optional[StateRecord] = None
    error: bool = False
    short: bool = False
    reason: Optional[str] = None
    restored_draft: bool = False

    @classmethod
    def failure(cls, reason: str) -> "ResolveResult":
        return cls(mode=CREATOR, loaded=False, error=True, reason=reason)


class LinkResolver:
    """Builds share URLs for the madlib app and parses them back.

    Short codes are preferred when a short-link backend is configured; the
    self-contained ``#<mode>=<token>`` form is the fallback.
    """

    def __init__(
        self,
        base_url: str,
        shortener: Optional[ShortLinkBackend] = None,
        codec: Optional[StateCodec] = None,
        logger: Optional[logging.Logger] = None,
        short_code_length: int = 6,
    ):
        """Initialize the resolver.

        Args:
            base_url: Page URL of the madlib app
            shortener: Short-link backend; None disables short links
            codec: State codec (a default one is created if omitted)
            logger: Optional logger
            short_code_length: Length of codes issued by the backend
        """
        is_valid, error = is_valid_base_url(base_url)
        if not is_valid:
            raise ValueError(f"Invalid base URL: {error}")

        self.base_url = base_url
        self.shortener = shortener
        self.codec = codec or StateCodec()
        self.logger = logger or logging.getLogger(__name__)
        self.short_code_length = short_code_length

    @property
    def short_links_enabled(self) -> bool:
        return self.shortener is not None

    async def build_share_link(self, mode: str, data: StateRecord) -> Optional[str]:
        """Build a URL that opens ``data`` in ``mode``.

        Returns:
            ``<base>#s=<code>`` when a short code was issued, otherwise
            ``<base>#<mode>=<token>``; None if the record cannot be encoded

        Raises:
            ValueError: If ``mode`` is not a link mode
        """
        is_valid, error = is_valid_mode(mode)
        if not is_valid:
            raise ValueError(error)

        if self.shortener is not None:
            try:
                short_code = await self.shortener.create(mode, data)
                return build_fragment_url(self.base_url, SHORT_KEY, short_code)
            except Exception as e:
                self.logger.warning(f"Short link unavailable, using long URL: {e}")

        token = self.codec.encode(data)
        if token is None:
            self.logger.error(f"Failed to generate {mode} link")
            return None
        return build_fragment_url(self.base_url, mode, token)

    async def parse_incoming(self, url_or_fragment: Optional[str]) -> ResolveResult:
        """Resolve the fragment of an incoming URL.

        Unrecognized fragments resolve like an empty one (creator mode, no
        error). A short code that cannot be expanded, or a token that cannot
        be decoded, resolves to a failure with ``error=True``.
        """
        fragment = extract_fragment(url_or_fragment or "")
        if not fragment:
            return ResolveResult()

        key, sep, value = fragment.partition("=")
        if not sep:
            return ResolveResult()

        if key == SHORT_KEY:
            return await self._expand(value)

        if key in LINK_MODES:
            record = self.codec.decode(value)
            if record is None:
                self.logger.warning(f"Could not decode {key} link")
                return ResolveResult.failure(DECODE_FAILED)
            return ResolveResult(mode=key, loaded=True, data=record)

        return ResolveResult()

    async def _expand(self, short_code: str) -> ResolveResult:
        if self.shortener is None:
            self.logger.warning("Short link received but short links are disabled")
            return ResolveResult.failure(UNAVAILABLE)

        is_valid, error = is_valid_short_code(short_code, self.short_code_length)
        if not is_valid:
            self.logger.warning(f"Rejected short code {short_code!r}: {error}")
            return ResolveResult.failure(INVALID_CODE)

        try:
            record = await self.shortener.expand(short_code)
        except Exception as e:
            self.logger.error(f"Failed to expand short code {short_code}: {e}")
            return ResolveResult.failure(UNAVAILABLE)

        if record is None:
            return ResolveResult.failure(NOT_FOUND)

        if record.mode not in LINK_MODES:
            return ResolveResult.failure(INVALID_RECORD)

        return ResolveResult(mode=record.mode, loaded=True, data=record.data, short=True)
