"""In-process key-value backend with expiry."""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from .base import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for single-process deployments and tests.

    Expired entries behave exactly like missing ones. They are dropped when
    they are next read, and ``put`` sweeps out every expired entry at most
    once per ``sweep_interval`` seconds so unread records do not pile up.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
        sweep_interval: float = 3600.0,
    ):
        """Initialize the store.

        Args:
            clock: Source of the current time in seconds
            logger: Optional logger instance
            sweep_interval: Minimum seconds between two sweeps of expired entries
        """
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.sweep_interval = sweep_interval
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._next_sweep = self.clock() + sweep_interval

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            self.logger.debug(f"Expired key evicted: {key}")
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self.clock()
        if now >= self._next_sweep:
            self.sweep(now)
        self._entries[key] = (value, now + ttl_seconds)

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self.clock() if now is None else now
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self.sweep_interval
        if expired:
            self.logger.info(f"Swept {len(expired)} expired keys")
        return len(expired)

    def __len__(self) -> int:
        now = self.clock()
        return sum(1 for _, expires_at in self._entries.values() if now < expires_at)

    async def close(self) -> None:
        self._entries.clear()

    async def health_check(self) -> bool:
        return True
