"""Compact URL-fragment encoding of madlib state records.

A record is dumped to compact JSON, zlib-compressed and written as URL-safe
base64 without padding, so the token only contains ``[A-Za-z0-9_-]`` and can
be placed after ``#play=`` / ``#edit=`` / ``#story=`` as is.
"""

import base64
import binascii
import json
import logging
import zlib
from typing import Optional

from .models import StateRecord


# Decoded payloads larger than this are rejected (decompression bomb guard)
MAX_DECODED_BYTES = 1024 * 1024


def _bytes_to_token(data: bytes) -> str:
    """bytes -> url-safe base64 string without padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _token_to_bytes(token: str) -> bytes:
    """url-safe base64 string (no padding) -> bytes."""
    padded = token + "=" * (-len(token) % 4)
    return base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)


class StateCodec:
    """Encode and decode StateRecords to and from fragment tokens.

    Neither method raises: failures are logged and reported as None.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        max_decoded_bytes: int = MAX_DECODED_BYTES,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.max_decoded_bytes = max_decoded_bytes

    def encode(self, record: StateRecord) -> Optional[str]:
        """Serialize ``record`` into a URL-fragment-safe token.

        Returns:
            The token, or None if the record cannot be represented as JSON
        """
        try:
            text = json.dumps(record.to_dict(), separators=(",", ":"), ensure_ascii=False)
            compressed = zlib.compress(text.encode("utf-8"), 9)
        except (TypeError, ValueError, AttributeError) as e:
            self.logger.error(f"Failed to encode record: {e}")
            return None
        return _bytes_to_token(compressed)

    def decode(self, token: str) -> Optional[StateRecord]:
        """Rebuild a StateRecord from a token produced by :meth:`encode`.

        Returns:
            The record, or None for anything that is not a valid token
        """
        if not token or not isinstance(token, str):
            return None

        try:
            raw = _token_to_bytes(token)
            decompressor = zlib.decompressobj()
            payload = decompressor.decompress(raw, self.max_decoded_bytes)
            if decompressor.unconsumed_tail:
                self.logger.warning("Rejected token: decoded payload too large")
                return None
            if not decompressor.eof:
                self.logger.warning("Rejected token: truncated payload")
                return None
            data = json.loads(payload.decode("utf-8"))
            return StateRecord.from_dict(data)
        except (binascii.Error, zlib.error, ValueError, TypeError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting raises RecursionError
            self.logger.warning(f"Failed to decode token: {e}")
            return None
