"""Short-link store: short code -> {mode, data, created}."""

import json
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from .database.base import KeyValueStore
from .errors import CorruptShortLinkError, InvalidShortenRequestError, ShortCodeExhaustedError
from .models import ShortLinkRecord, StateRecord
from .shortcode import ShortCodeGenerator
from .common.validators import is_valid_mode

ONE_YEAR_SECONDS = 31536000


class ShortLinkStore:
    """Creates and expands short codes on top of a key-value backend.

    Codes are reserved check-then-write: a candidate is only written when no
    record is stored under it. Records are never updated and disappear when
    the backend expires them.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = 10,
        retention_seconds: int = ONE_YEAR_SECONDS,
    ):
        """Initialize short-link store.

        Args:
            kv: Key-value backend
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_attempts: Candidate codes drawn before giving up
            retention_seconds: Lifetime of a stored record
        """
        self.kv = kv
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts
        self.retention_seconds = retention_seconds

    async def create(self, mode: str, data: Union[StateRecord, dict]) -> str:
        """Store a madlib under a fresh short code.

        Args:
            mode: One of play, edit, story
            data: The madlib record (a dict is parsed into a StateRecord)

        Returns:
            The new short code

        Raises:
            InvalidShortenRequestError: If mode or data is invalid
            ShortCodeExhaustedError: If every candidate code collided
        """
        is_valid, error = is_valid_mode(mode)
        if not is_valid:
            raise InvalidShortenRequestError(error)

        if not isinstance(data, StateRecord):
            try:
                data = StateRecord.from_dict(data)
            except ValueError as e:
                raise InvalidShortenRequestError(f"Invalid madlib data: {e}")

        short_code = await self._generate_unique_short_code()

        record = ShortLinkRecord(
            mode=mode,
            data=data,
            created=datetime.now(timezone.utc).isoformat(),
        )
        await self.kv.put(short_code, json.dumps(record.to_dict()), self.retention_seconds)

        self.logger.info(f"Created short link: {short_code} ({mode})")
        return short_code

    async def expand(self, short_code: str) -> Optional[ShortLinkRecord]:
        """Look up the record stored under a short code.

        Matching is exact and case-sensitive.

        Returns:
            The record, or None if it never existed or has expired

        Raises:
            CorruptShortLinkError: If a stored value cannot be parsed
        """
        if not self.generator.is_valid_code(short_code):
            self.logger.debug(f"Malformed short code: {short_code!r}")
            return None

        raw = await self.kv.get(short_code)
        if raw is None:
            self.logger.warning(f"Short code not found: {short_code}")
            return None

        try:
            record = ShortLinkRecord.from_dict(json.loads(raw))
        except ValueError as e:
            self.logger.error(f"Corrupt record under {short_code}: {e}")
            raise CorruptShortLinkError(f"Stored record for '{short_code}' is unreadable: {e}")

        self.logger.debug(f"Expanded short link: {short_code}")
        return record

    async def health_check(self) -> bool:
        return await self.kv.health_check()

    async def close(self) -> None:
        """Close backend connections."""
        await self.kv.close()

    async def _generate_unique_short_code(self) -> str:
        """Draw codes until one is free.

        Raises:
            ShortCodeExhaustedError: If ``max_attempts`` codes all collide
        """
        for attempt in range(self.max_attempts):
            code = self.generator.generate_random()

            if await self.kv.get(code) is None:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code

            self.logger.warning(f"Short code collision on attempt {attempt + 1}: {code}")

        raise ShortCodeExhaustedError(
            f"Unable to generate unique short code after {self.max_attempts} attempts"
        )
