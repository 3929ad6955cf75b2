"""Core share-link logic for the madlib maker."""

from .codec import StateCodec
from .models import Placeholder, ShortLinkRecord, StateRecord, Theme, UNSET
from .shortcode import ShortCodeGenerator
from .store import ShortLinkStore
from .client import ShortenerClient
from .resolver import LinkResolver, ResolveResult
from .state import LiveState
from .loader import StateLoader
from .session import MadlibSession, build_session

__all__ = [
    "StateCodec",
    "Placeholder",
    "ShortLinkRecord",
    "StateRecord",
    "Theme",
    "UNSET",
    "ShortCodeGenerator",
    "ShortLinkStore",
    "ShortenerClient",
    "LinkResolver",
    "ResolveResult",
    "LiveState",
    "StateLoader",
    "MadlibSession",
    "build_session",
]
