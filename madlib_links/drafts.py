"""Local draft persistence for the creator."""

import json
import logging
import os
from typing import Optional

from .models import StateRecord


class DraftStore:
    """Keeps one creator draft as a JSON file."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.logger = logger or logging.getLogger(__name__)

    def save(self, record: StateRecord) -> bool:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(record.to_dict(), f, ensure_ascii=False)
            return True
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to save draft: {e}")
            return False

    def load(self) -> Optional[StateRecord]:
        """The stored draft, or None if there is none or it is unreadable."""
        if not self.has_draft():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return StateRecord.from_dict(json.load(f))
        except (OSError, ValueError, RecursionError) as e:
            self.logger.error(f"Failed to load draft: {e}")
            return None

    def has_draft(self) -> bool:
        return os.path.exists(self.path)

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
