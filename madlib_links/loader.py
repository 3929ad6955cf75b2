"""Apply decoded records onto live state."""

import logging
from typing import Callable, List, Optional, Tuple

from .models import StateRecord, is_set
from .state import LiveState


class StateLoader:
    """Copies the present fields of a StateRecord onto a LiveState.

    Each field is written on its own: a failure on one field is logged and
    does not stop the others. There is no rollback, so a failed load may leave
    some fields applied.
    """

    def __init__(self, state: LiveState, logger: Optional[logging.Logger] = None):
        self.state = state
        self.logger = logger or logging.getLogger(__name__)

    def apply(self, record: Optional[StateRecord]) -> bool:
        """Apply ``record``; unset fields leave the live slot untouched.

        Returns:
            True if every present field was applied
        """
        if record is None:
            return False

        ok = True
        for name, write in self._writers(record):
            try:
                write()
            except Exception as e:
                self.logger.error(f"Failed to load {name}: {e}")
                ok = False
        return ok

    def _writers(self, record: StateRecord) -> List[Tuple[str, Callable[[], None]]]:
        writers = []
        if is_set(record.title):
            writers.append(("title", lambda: self.state.set_title(record.title)))
        if is_set(record.subtitle):
            writers.append(("subtitle", lambda: self.state.set_subtitle(record.subtitle)))
        if is_set(record.placeholders):
            writers.append(("placeholders", lambda: self.state.set_placeholders(record.placeholders)))
        if is_set(record.story):
            writers.append(("story", lambda: self.state.set_story(record.story)))
        if is_set(record.theme) and record.theme is not None:
            writers.append(("theme", lambda: self._apply_theme(record)))
        if is_set(record.answers):
            writers.append(("answers", lambda: self.state.set_answers(record.answers)))
        return writers

    def _apply_theme(self, record: StateRecord) -> None:
        if not self.state.set_theme(record.theme):
            self.logger.warning("Ignoring incomplete theme: all four colors are required")
