"""In-memory state of the madlib app."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .common.validators import placeholder_number
from .models import Placeholder, StateRecord, Theme


THEME_PRESETS = {
    "brick": Theme(background="#1c0001", text="#ddd5ba", button="#831a19", highlight="#eeb440"),
    "ocean": Theme(background="#0a1929", text="#b8d4e3", button="#1a4f6e", highlight="#4fc3f7"),
    "forest": Theme(background="#0d1f12", text="#c5d4b8", button="#2d5a3d", highlight="#f0b429"),
    "midnight": Theme(background="#0f0a1a", text="#d4c5e8", button="#4a1a6b", highlight="#bb86fc"),
}
DEFAULT_THEME = "brick"


@dataclass
class LiveState:
    """What the editor and player currently show."""

    title: str = ""
    subtitle: str = ""
    placeholders: List[Placeholder] = field(default_factory=list)
    story: str = ""
    theme: Theme = field(default_factory=lambda: THEME_PRESETS[DEFAULT_THEME])
    answers: Optional[Dict[str, str]] = None
    next_placeholder: int = 1

    def set_title(self, title: str) -> None:
        self.title = title

    def set_subtitle(self, subtitle: str) -> None:
        self.subtitle = subtitle

    def set_story(self, story: str) -> None:
        self.story = story

    def set_placeholders(self, placeholders: List[Placeholder]) -> None:
        """Replace every placeholder; new ids continue after the highest ``word<N>``."""
        loaded = [Placeholder(id=p.id, label=p.label) for p in placeholders]
        numbers = [placeholder_number(p.id) for p in loaded]
        self.placeholders = loaded
        self.next_placeholder = max([n for n in numbers if n is not None], default=0) + 1

    def add_placeholder(self, label: str) -> Optional[Placeholder]:
        """Append a placeholder with the next ``wordNN`` id. Blank labels are ignored."""
        if not label or not label.strip():
            return None
        placeholder = Placeholder(id=f"word{self.next_placeholder:02d}", label=label.strip())
        self.next_placeholder += 1
        self.placeholders = self.placeholders + [placeholder]
        return placeholder

    def set_theme(self, theme: Theme) -> bool:
        """Switch theme. Returns False (and keeps the current one) if a color is missing."""
        if not theme.is_complete():
            return False
        self.theme = theme
        return True

    def set_answers(self, answers: Optional[Dict[str, str]]) -> None:
        self.answers = dict(answers) if answers is not None else None

    def active_preset(self) -> Optional[str]:
        for name, preset in THEME_PRESETS.items():
            if preset == self.theme:
                return name
        return None

    def is_default_theme(self) -> bool:
        return self.active_preset() == DEFAULT_THEME

    def collect(self, answers: Optional[Dict[str, str]] = None) -> StateRecord:
        """Record to put in a share link. The default theme is left out."""
        record = StateRecord(
            title=self.title,
            subtitle=self.subtitle,
            placeholders=list(self.placeholders),
            story=self.story,
        )
        if not self.is_default_theme():
            record.theme = self.theme
        if answers is not None:
            record.answers = dict(answers)
        return record

    def snapshot(self) -> StateRecord:
        """Full record for local drafts, theme included."""
        return StateRecord(
            title=self.title,
            subtitle=self.subtitle,
            placeholders=list(self.placeholders),
            story=self.story,
            theme=self.theme,
        )

    def reset(self) -> None:
        """Back to a blank creator."""
        self.title = ""
        self.subtitle = ""
        self.set_placeholders([])
        self.story = ""
        self.theme = THEME_PRESETS[DEFAULT_THEME]
        self.answers = None
