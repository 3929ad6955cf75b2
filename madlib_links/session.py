"""Composition root tying state, loader, resolver and drafts together."""

import logging
from typing import Dict, Optional

from .client import ShortenerClient
from .codec import StateCodec
from .common.logging_config import component_logger
from .drafts import DraftStore
from .errors import ShareError
from .loader import StateLoader
from .models import PLAY, STORY
from .resolver import APPLY_FAILED, LinkResolver, ResolveResult
from .state import LiveState


class MadlibSession:
    """One running madlib app.

    Components get their collaborators passed in here; none of them looks
    another one up by itself.
    """

    def __init__(
        self,
        state: LiveState,
        resolver: LinkResolver,
        loader: Optional[StateLoader] = None,
        drafts: Optional[DraftStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.state = state
        self.resolver = resolver
        self.loader = loader or StateLoader(state)
        self.drafts = drafts
        self.logger = logger or logging.getLogger(__name__)

    async def share(self, mode: str, answers: Optional[Dict[str, str]] = None) -> str:
        """Build a share link for the current madlib.

        Raises:
            ShareError: With a user-facing message when no link can be made
        """
        if mode == PLAY:
            if not self.state.placeholders:
                raise ShareError("Add at least one placeholder to share")
            if not self.state.story.strip():
                raise ShareError("Add story content to share")

        record = self.state.collect(answers=answers if mode == STORY else None)
        url = await self.resolver.build_share_link(mode, record)
        if url is None:
            raise ShareError("Failed to generate link")
        return url

    async def open(self, url: Optional[str]) -> ResolveResult:
        """Load whatever ``url`` points at.

        When the link cannot be loaded the local draft is restored if there is
        one, otherwise the creator starts blank.
        """
        result = await self.resolver.parse_incoming(url)

        if result.loaded and not self.loader.apply(result.data):
            self.logger.warning("Could not load madlib from URL")
            result = ResolveResult.failure(APPLY_FAILED)

        if result.error:
            result.restored_draft = self.restore_draft()
            if not result.restored_draft:
                self.state.reset()

        return result

    def save_draft(self) -> bool:
        if self.drafts is None:
            return False
        return self.drafts.save(self.state.snapshot())

    def restore_draft(self) -> bool:
        if self.drafts is None:
            return False
        draft = self.drafts.load()
        if draft is None:
            return False
        return self.loader.apply(draft)

    async def close(self) -> None:
        if isinstance(self.resolver.shortener, ShortenerClient):
            await self.resolver.shortener.close()


def build_session(config, logger: Optional[logging.Logger] = None, transport=None) -> MadlibSession:
    """Wire a session from configuration.

    Args:
        config: Application configuration (see ``config.Config``)
        logger: Parent of the component loggers (the package logger if omitted)
        transport: Optional httpx transport for the short-link client

    Returns:
        A session with a blank creator state
    """
    shortener = None
    if config.short_links_enabled:
        shortener = ShortenerClient(
            api_url=config.shortener_api_url,
            timeout=config.shortener_timeout_seconds,
            logger=component_logger("client", logger),
            transport=transport,
        )

    state = LiveState()
    resolver = LinkResolver(
        base_url=config.app_url,
        shortener=shortener,
        codec=StateCodec(logger=component_logger("codec", logger)),
        logger=component_logger("resolver", logger),
        short_code_length=config.short_code_length,
    )
    return MadlibSession(
        state=state,
        resolver=resolver,
        loader=StateLoader(state, logger=component_logger("loader", logger)),
        drafts=DraftStore(config.draft_path, logger=component_logger("drafts", logger)),
        logger=component_logger("session", logger),
    )
