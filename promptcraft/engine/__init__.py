"""Deterministic prompt-enhancement engine.

The orchestrator lives in ``promptcraft.engine.orchestrator`` and is not
imported here because the generators depend on this package's models.
"""

from .classifier import IntentClassifier, classify
from .entities import (
    detect_genre,
    extract_actions,
    extract_characters,
    extract_settings,
    extract_story_elements,
    extract_themes,
)
from .models import (
    DetailLevel,
    EnhancedPrompt,
    EnhancementOptions,
    Intent,
    Length,
    RequestType,
    StoryElements,
    Tone,
)
from .normalizer import SpellingNormalizer, normalize

__all__ = [
    "IntentClassifier",
    "classify",
    "SpellingNormalizer",
    "normalize",
    "detect_genre",
    "extract_actions",
    "extract_characters",
    "extract_settings",
    "extract_story_elements",
    "extract_themes",
    "DetailLevel",
    "EnhancedPrompt",
    "EnhancementOptions",
    "Intent",
    "Length",
    "RequestType",
    "StoryElements",
    "Tone",
]
