"""Data models for madlib share links."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional, Union


PLAY = "play"
EDIT = "edit"
STORY = "story"
CREATOR = "creator"

# Modes that can be carried by a link
LINK_MODES = (PLAY, EDIT, STORY)


class Unset:
    """Marker for a field that is absent, as opposed to present and empty."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET = Unset()


def is_set(value: Any) -> bool:
    """True when ``value`` is present (possibly empty), False for UNSET."""
    return value is not UNSET


def _require_str(data: Dict[str, Any], key: str) -> Union[str, Unset]:
    if key not in data:
        return UNSET
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


@dataclass(frozen=True)
class Placeholder:
    """A named blank in the story, referenced as ``{<id>}``."""

    id: str
    label: str

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: Any) -> "Placeholder":
        if not isinstance(data, dict):
            raise ValueError("placeholder must be an object")
        pid = data.get("id")
        if not isinstance(pid, str) or not pid:
            raise ValueError("placeholder id must be a non-empty string")
        label = data.get("label", "")
        if not isinstance(label, str):
            raise ValueError("placeholder label must be a string")
        return cls(id=pid, label=label)


@dataclass(frozen=True)
class Theme:
    """Four theme colors. Any of them may be missing on an incoming record."""

    background: Optional[str] = None
    text: Optional[str] = None
    button: Optional[str] = None
    highlight: Optional[str] = None

    # Wire name for each attribute; 'bg' keeps encoded links short
    WIRE_KEYS: ClassVar[Dict[str, str]] = {"background": "bg", "text": "text", "button": "button", "highlight": "highlight"}

    def is_complete(self) -> bool:
        return all((self.background, self.text, self.button, self.highlight))

    def to_dict(self) -> dict:
        result = {}
        for attr, key in self.WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Theme":
        if not isinstance(data, dict):
            raise ValueError("theme must be an object")
        values = {}
        for attr, key in cls.WIRE_KEYS.items():
            value = data.get(key, data.get(attr))
            if value is not None and not isinstance(value, str):
                raise ValueError(f"theme color '{key}' must be a string")
            values[attr] = value
        return cls(**values)


@dataclass
class StateRecord:
    """Serializable snapshot of one madlib.

    Every field defaults to UNSET; ``to_dict`` omits unset fields and
    ``from_dict`` leaves absent keys unset, so a partial record stays partial.
    """

    title: Union[str, Unset] = UNSET
    subtitle: Union[str, Unset] = UNSET
    placeholders: Union[List[Placeholder], Unset] = UNSET
    story: Union[str, Unset] = UNSET
    theme: Union[Optional[Theme], Unset] = UNSET
    answers: Union[Optional[Dict[str, str]], Unset] = UNSET

    def present_fields(self) -> List[str]:
        """Names of the fields that carry a value."""
        return [f.name for f in fields(self) if is_set(getattr(self, f.name))]

    def with_defaults(self) -> "StateRecord":
        """Copy with every unset field replaced by its documented default."""
        return StateRecord(
            title=self.title if is_set(self.title) else "",
            subtitle=self.subtitle if is_set(self.subtitle) else "",
            placeholders=list(self.placeholders) if is_set(self.placeholders) else [],
            story=self.story if is_set(self.story) else "",
            theme=self.theme if is_set(self.theme) else None,
            answers=dict(self.answers) if is_set(self.answers) else None,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        result: Dict[str, Any] = {}
        if is_set(self.title):
            result["title"] = self.title
        if is_set(self.subtitle):
            result["subtitle"] = self.subtitle
        if is_set(self.placeholders):
            result["placeholders"] = [p.to_dict() for p in self.placeholders]
        if is_set(self.story):
            result["story"] = self.story
        if is_set(self.theme) and self.theme is not None:
            result["theme"] = self.theme.to_dict()
        if is_set(self.answers) and self.answers is not None:
            result["answers"] = dict(self.answers)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "StateRecord":
        """Create from a decoded JSON object.

        Unknown keys are ignored. Raises ValueError when a known key holds a
        value of the wrong shape or when placeholder ids repeat.
        """
        if not isinstance(data, dict):
            raise ValueError("record must be an object")

        placeholders: Union[List[Placeholder], Unset] = UNSET
        if "placeholders" in data:
            raw = data["placeholders"]
            if not isinstance(raw, list):
                raise ValueError("'placeholders' must be a list")
            placeholders = [Placeholder.from_dict(p) for p in raw]
            ids = [p.id for p in placeholders]
            if len(ids) != len(set(ids)):
                raise ValueError("placeholder ids must be unique")

        theme: Union[Theme, Unset] = UNSET
        if data.get("theme") is not None:
            theme = Theme.from_dict(data["theme"])

        answers: Union[Dict[str, str], Unset] = UNSET
        if data.get("answers") is not None:
            raw_answers = data["answers"]
            if not isinstance(raw_answers, dict):
                raise ValueError("'answers' must be an object")
            if not all(isinstance(v, str) for v in raw_answers.values()):
                raise ValueError("answers must be strings")
            answers = {str(k): v for k, v in raw_answers.items()}

        return cls(
            title=_require_str(data, "title"),
            subtitle=_require_str(data, "subtitle"),
            placeholders=placeholders,
            story=_require_str(data, "story"),
            theme=theme,
            answers=answers,
        )

    def copy(self, **changes) -> "StateRecord":
        return replace(self, **changes)


@dataclass
class ShortLinkRecord:
    """A record stored under a short code."""

    mode: str
    data: StateRecord
    created: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {"mode": self.mode, "data": self.data.to_dict(), "created": self.created}

    @classmethod
    def from_dict(cls, data: Any) -> "ShortLinkRecord":
        if not isinstance(data, dict):
            raise ValueError("short-link record must be an object")
        mode = data.get("mode")
        if mode not in LINK_MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        created = data.get("created") or ""
        return cls(mode=mode, data=StateRecord.from_dict(data.get("data")), created=str(created))
