"""Keyword-table entity extraction for creative prompts.

Every function here is pure and total: it lowercases the prompt, tests
substring membership against the read-only tables in ``lexicon`` and falls
back to sensible defaults instead of returning nothing where a caller needs
something to render.
"""

import logging
from typing import List, Sequence

from . import lexicon
from .models import Action, Character, Setting, StoryElements, Theme

logger = logging.getLogger(__name__)


def extract_characters(prompt: str) -> List[Character]:
    """Return every known character mentioned, or a synthetic protagonist."""
    lower = prompt.lower()
    found = [character for keyword, character in lexicon.CHARACTERS.items() if keyword in lower]
    return found or [lexicon.DEFAULT_CHARACTER]


def extract_settings(prompt: str) -> List[Setting]:
    """Return every known setting mentioned. May be empty."""
    lower = prompt.lower()
    return [setting for keyword, setting in lexicon.SETTINGS.items() if keyword in lower]


def extract_themes(prompt: str, characters: Sequence[Character]) -> List[Theme]:
    """Keyword-triggered themes, then the primary character's themes, capped at three."""
    lower = prompt.lower()
    themes: List[Theme] = []
    seen = set()

    def add(name: str) -> None:
        if name not in seen and name in lexicon.THEMES:
            seen.add(name)
            themes.append(Theme(name=name, exploration=lexicon.THEMES[name][1]))

    for name, (keywords, _) in lexicon.THEMES.items():
        if any(keyword in lower for keyword in keywords):
            add(name)

    if characters:
        for name in lexicon.CHARACTER_THEMES.get(characters[0].name, ()):
            add(name)

    if not themes:
        themes = [Theme(name=name, exploration=text) for name, text in lexicon.DEFAULT_THEMES]

    return themes[: lexicon.MAX_THEMES]


def extract_actions(prompt: str) -> List[Action]:
    """Match each action verb or its crude stem (last three letters dropped)."""
    lower = prompt.lower()
    return [
        action
        for verb, action in lexicon.ACTIONS.items()
        if verb in lower or verb[: -lexicon.ACTION_STEM_SUFFIX] in lower
    ]


def detect_genre(
    prompt: str, characters: Sequence[Character], settings: Sequence[Setting] = ()
) -> str:
    lower = prompt.lower()
    for genre, keywords in lexicon.GENRE_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return genre

    if characters:
        genre = lexicon.GENRE_BY_CHARACTER.get(characters[0].name)
        if genre:
            return genre

    return lexicon.DEFAULT_GENRE


def extract_story_elements(prompt: str) -> StoryElements:
    """Run all extractors over ``prompt`` and bundle the results."""
    characters = extract_characters(prompt)
    settings = extract_settings(prompt)
    elements = StoryElements(
        characters=tuple(characters),
        settings=tuple(settings),
        themes=tuple(extract_themes(prompt, characters)),
        actions=tuple(extract_actions(prompt)),
        genre=detect_genre(prompt, characters, settings),
    )
    logger.debug("Extracted story elements: %s", elements.to_dict())
    return elements
