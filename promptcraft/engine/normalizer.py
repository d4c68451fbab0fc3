"""Deterministic cleanup of user-typed prompts."""

import logging
import re
from typing import Dict, Mapping, Optional, Pattern, Tuple

from .lexicon import CORRECTIONS

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_STANDALONE_I = re.compile(r"\bi\b(?!\.\w)")
# Leaves camel-cased brands such as "iOS" and "iPhone" alone.
_SENTENCE_START = re.compile(r"(^|[.!?]\s+)([a-z])(?![A-Z])")
_TERMINAL = (".", "!", "?")


def _compile(corrections: Mapping[str, str]) -> Tuple[Tuple[Pattern[str], str], ...]:
    # Longest keys first so multi-word corrections win over their parts.
    ordered = sorted(corrections.items(), key=lambda item: -len(item[0]))
    return tuple(
        (re.compile(rf"(?<![\w']){re.escape(key)}(?![\w'])", re.IGNORECASE), value)
        for key, value in ordered
    )


class SpellingNormalizer:
    """Fixes common misspellings, casing and punctuation.

    Corrections are matched as whole words only, so "ai" is fixed in
    "ai tools" but "Thailand" is left alone.
    """

    def __init__(self, corrections: Optional[Dict[str, str]] = None):
        self._patterns = _compile(corrections if corrections is not None else CORRECTIONS)

    def normalize(self, text: str) -> str:
        if not text:
            return ""

        result = _WHITESPACE.sub(" ", text).strip()
        if not result:
            return ""

        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)

        result = _STANDALONE_I.sub("I", result)
        result = _SENTENCE_START.sub(lambda m: m.group(1) + m.group(2).upper(), result)

        if not result.endswith(_TERMINAL):
            result += "."

        logger.debug("Normalized prompt (%d -> %d chars)", len(text), len(result))
        return result


_default = SpellingNormalizer()


def normalize(text: str) -> str:
    """Normalize text with the built-in corrections table."""
    return _default.normalize(text)
