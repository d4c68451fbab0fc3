"""Value types shared by the enhancement engine."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class RequestType(str, Enum):
    """Discrete prompt categories, each served by one generator."""

    CREATIVE_WRITING = "creative_writing"
    POETRY = "poetry"
    APP_DEVELOPMENT = "app_development"
    WEB_DEVELOPMENT = "web_development"
    CODE_WRITING = "code_writing"
    DEBUGGING = "debugging"
    CONTENT_WRITING = "content_writing"
    BUSINESS_WRITING = "business_writing"
    EXPLANATION = "explanation"
    BRAINSTORMING = "brainstorming"
    IMAGE_GENERATION = "image_generation"
    GENERAL = "general"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    CREATIVE = "creative"
    TECHNICAL = "technical"


class Length(str, Enum):
    CONCISE = "concise"
    BALANCED = "balanced"
    DETAILED = "detailed"


class DetailLevel(str, Enum):
    """How much of a development template to render."""

    ARCHITECTURE = "architecture"
    FULL_CODE = "full_code"


class EnhancementOptions(BaseModel):
    """Caller-supplied knobs. Unrecognized values fall back to defaults."""

    model_config = ConfigDict(frozen=True)

    tone: Tone = Tone.PROFESSIONAL
    length: Length = Length.BALANCED
    model: str = "all"
    detail_level: DetailLevel = DetailLevel.FULL_CODE

    @field_validator("tone", mode="before")
    @classmethod
    def _coerce_tone(cls, v: Any) -> Tone:
        return _coerce(Tone, v, Tone.PROFESSIONAL)

    @field_validator("length", mode="before")
    @classmethod
    def _coerce_length(cls, v: Any) -> Length:
        return _coerce(Length, v, Length.BALANCED)

    @field_validator("detail_level", mode="before")
    @classmethod
    def _coerce_detail_level(cls, v: Any) -> DetailLevel:
        return _coerce(DetailLevel, v, DetailLevel.FULL_CODE)

    @field_validator("model", mode="before")
    @classmethod
    def _coerce_model(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "all"
        return v.strip()

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]] = None) -> "EnhancementOptions":
        """Build options from a loose dict, accepting camelCase keys."""
        data = data or {}
        return cls(
            tone=data.get("tone"),
            length=data.get("length"),
            model=data.get("model"),
            detail_level=data.get("detail_level", data.get("detailLevel")),
        )


def _coerce(enum_cls, value: Any, default):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


@dataclass(frozen=True)
class Character:
    """A character or creature recognized in the prompt."""

    name: str
    type: str
    attributes: Tuple[str, ...]
    species: Tuple[str, ...] = ()
    archetypes: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    roles: Tuple[str, ...] = ()
    arcs: Tuple[str, ...] = ()
    purposes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Setting:
    name: str
    type: str
    atmosphere: str
    details: Tuple[str, ...]


@dataclass(frozen=True)
class Theme:
    name: str
    exploration: str


@dataclass(frozen=True)
class Action:
    name: str
    type: str
    detail: str


@dataclass(frozen=True)
class StoryElements:
    """Everything the extractor pulled out of a creative prompt."""

    characters: Tuple[Character, ...]
    settings: Tuple[Setting, ...]
    themes: Tuple[Theme, ...]
    actions: Tuple[Action, ...]
    genre: str

    @property
    def primary_character(self) -> Character:
        return self.characters[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "characters": [c.name for c in self.characters],
            "settings": [s.name for s in self.settings],
            "themes": [t.name for t in self.themes],
            "actions": [a.name for a in self.actions],
            "genre": self.genre,
        }


@dataclass(frozen=True)
class Intent:
    """Classification result.

    ``subject`` is the narrowed text the generator interpolates; ``slot`` names
    what it represents for this type (topic, problem, concept, ...).
    """

    type: RequestType
    subject: str
    slot: str = "prompt"
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "slot": self.slot,
            "subject": self.subject,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class EnhancedPrompt:
    text: str
    request_type: RequestType
    input_length: int
    output_length: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    intent: Optional[Intent] = None
    elements: Optional[StoryElements] = None

    def to_dict(self) -> Dict[str, Any]:
        """Boundary shape consumed by the web front end and extension."""
        return {
            "enhancedPrompt": self.text,
            "metadata": {
                "requestType": self.request_type.value,
                "inputLength": self.input_length,
                "outputLength": self.output_length,
                "timestamp": self.timestamp.isoformat(),
            },
        }
