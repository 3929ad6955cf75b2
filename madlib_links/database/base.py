"""Abstract base class for short-link key-value backends."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Key-value storage with per-key expiry.

    Implementations must make each ``get`` and ``put`` atomic for a single
    key. No multi-key operation is required.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key.

        Args:
            key: The key to lookup

        Returns:
            The stored value, or None if absent or expired
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ``ttl_seconds``.

        Args:
            key: The key to write
            value: Serialized value
            ttl_seconds: Lifetime of the entry
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close backend connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
