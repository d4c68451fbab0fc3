"""Story and poetry templates driven by extracted story elements."""

from typing import List

from ..engine.entities import extract_story_elements
from ..engine.lexicon import DEFAULT_GENRE, GENRE_TIPS
from ..engine.models import Character, Length, RequestType, StoryElements
from .base import GenerationContext, LengthScale, PromptGenerator, bullets, title

_COMPLICATIONS = {Length.CONCISE: "2", Length.BALANCED: "3", Length.DETAILED: "4-5"}


def _elements(context: GenerationContext) -> StoryElements:
    return context.elements or extract_story_elements(context.subject)


def _character_lines(character: Character) -> List[str]:
    lines = []
    if character.species:
        lines.append(
            f"Specify the {character.name}'s species "
            f"({', '.join(character.species)} or your own creation)"
        )
    elif character.archetypes:
        lines.append(
            f"Define the character archetype ({', '.join(character.archetypes)} or original)"
        )
    elif character.types:
        lines.append(f"Establish the type ({', '.join(character.types)} or unique variation)")

    if character.roles:
        lines.append(
            f"Historical/narrative role: {', '.join(character.roles)} or create a unique role"
        )
    elif character.arcs:
        lines.append(f"Character arc possibilities: {', '.join(character.arcs)}")
    elif character.purposes:
        lines.append(f"Driving purpose: {', '.join(character.purposes)} or something unexpected")

    lines.append(
        f"Primary motivation or internal conflict: define what the {character.name} wants "
        "vs. what it needs, and create psychological depth through this tension"
    )
    lines.append(f"Attributes to embody: {', '.join(character.attributes)}")
    return lines


def _setting_block(elements: StoryElements) -> str:
    if elements.settings:
        setting = elements.settings[0]
        return (
            "**SETTING REQUIREMENTS:**\n"
            f"Environment: {title(setting.name)} ({setting.type})\n"
            f"Atmosphere: {setting.atmosphere}\n"
            f"Sensory Details to Include: {', '.join(setting.details)}"
        )
    return (
        "**SETTING REQUIREMENTS:**\n"
        f"Create a vivid, immersive environment that complements the {elements.genre} genre. "
        "Include specific sensory details: visual elements, sounds, smells, textures, "
        "and ambient atmosphere."
    )


def _theme_block(elements: StoryElements) -> str:
    lines = [
        f"{i}. **{title(theme.name)}**: {theme.exploration}"
        for i, theme in enumerate(elements.themes, start=1)
    ]
    return "**THEMATIC EXPLORATION (choose at least one as primary focus):**\n" + "\n".join(lines)


def _genre_tip(genre: str) -> str:
    return GENRE_TIPS.get(genre, GENRE_TIPS[DEFAULT_GENRE])


class CreativeWritingGenerator(PromptGenerator):
    """Short-story prompt built around the primary character, setting and themes."""

    request_type = RequestType.CREATIVE_WRITING
    length_scale = LengthScale("words", (800, 1200), (1500, 2000), (2500, 3000))
    needs_entities = True

    def build(self, context: GenerationContext) -> str:
        elements = _elements(context)
        character = elements.primary_character
        genre = elements.genre

        sections = [
            "Write a compelling, original short story "
            f"(approximately {self.target(context)}) featuring a {character.name} "
            "as a central character.",
            f"Story premise: {context.subject}",
            "**CHARACTER REQUIREMENTS:**\n" + "\n".join(_character_lines(character)),
        ]

        if len(elements.characters) > 1:
            others = ", ".join(c.name for c in elements.characters[1:])
            sections.append(
                f"**SUPPORTING CAST:**\nGive the {others} distinct goals that complicate "
                f"the {character.name}'s path."
            )

        sections.append(_setting_block(elements))

        if elements.actions:
            action = elements.actions[0]
            sections.append(
                "**CENTRAL ACTION/EVENT:**\n"
                f"{title(action.detail)}: this should be central to the narrative, "
                "revealing character and advancing theme."
            )

        sections.append(_theme_block(elements))

        sections.append(
            "**NARRATIVE STRUCTURE:**\n"
            + bullets(
                [
                    "**Opening Hook**: Begin with immediate intrigue: a striking image, "
                    "provocative question, or moment of tension",
                    "**Rising Action**: Escalate the central conflict through "
                    f"{_COMPLICATIONS[context.length]} distinct complications",
                    "**Climax**: Deliver a transformative moment of revelation, decision, "
                    "or confrontation",
                    "**Resolution**: Provide emotional closure that resonates with your "
                    "chosen theme (avoid neat, clichéd endings)",
                ]
            )
        )

        viewpoint = (
            "close third-person or first-person"
            if genre == DEFAULT_GENRE
            else "the most effective viewpoint for your story"
        )
        sections.append(
            "**CRAFT REQUIREMENTS:**\n"
            + bullets(
                [
                    f"**POV**: Write from the {character.name}'s perspective using {viewpoint}",
                    "**Sensory Detail**: Include vivid descriptions engaging at least 3 senses "
                    "in each scene",
                    "**Dialogue**: If present, dialogue must reveal character and advance plot "
                    "simultaneously",
                    "**Pacing**: Vary sentence length, short during tension and longer during "
                    "reflection",
                    "**Show Don't Tell**: Dramatize emotions through actions, body language, "
                    "and environmental details",
                ]
            )
        )

        sections.append(f"**GENRE GUIDANCE ({title(genre)}):**\n{_genre_tip(genre)}")

        sections.append(
            "**QUALITY STANDARDS:**\n"
            "The story should be publication-ready, demonstrating mastery of:\n"
            "- A distinctive narrative voice\n"
            "- Believable character motivation\n"
            "- Atmospheric world-building\n"
            "- Thematic coherence\n"
            "- A memorable final line that echoes the central theme\n\n"
            "Begin your story immediately with the narrative, with no preamble or "
            "meta-commentary."
        )
        return "\n\n".join(sections)


_FORM_RULES = {
    "haiku": "Follow the 5-7-5 syllable pattern in each stanza and anchor every stanza "
    "in a concrete seasonal image.",
    "sonnet": "Use fourteen lines in iambic pentameter with a clear volta (turn) "
    "before the final couplet or sestet.",
    "limerick": "Use the AABBA rhyme scheme with anapestic rhythm and land a witty "
    "final line.",
    "free verse": "Let line breaks carry the rhythm; use enjambment deliberately.",
    "ballad": "Use quatrains with a regular rhyme scheme and tell a story across stanzas.",
    "ode": "Address the subject directly with elevated, celebratory language.",
    "lyrics": "Structure as verses and a repeated chorus with a singable meter.",
}


class PoetryGenerator(PromptGenerator):
    request_type = RequestType.POETRY
    length_scale = LengthScale("lines", (8, 12), (16, 24), (30, 40))
    needs_entities = True

    def build(self, context: GenerationContext) -> str:
        elements = _elements(context)
        form = context.detail("form", "poem")
        form_rule = _FORM_RULES.get(
            form, "Choose the form (free verse, sonnet, ballad, ...) that best serves the subject."
        )
        themes = ", ".join(theme.name for theme in elements.themes)

        imagery = (
            f"Draw imagery from the {elements.settings[0].name}: "
            f"{', '.join(elements.settings[0].details)}"
            if elements.settings
            else "Build imagery from concrete, specific sensory details"
        )

        return "\n\n".join(
            [
                "You are an accomplished poet with a command of traditional and "
                "contemporary forms.",
                f"Write a {form} of approximately {self.target(context)} about: "
                f"{context.subject}",
                f"**FORM & STRUCTURE:**\n{form_rule}",
                f"**THEMES TO EXPLORE:**\n{themes}",
                "**IMAGERY & LANGUAGE:**\n"
                + bullets(
                    [
                        imagery,
                        "Favor fresh metaphors over familiar clichés",
                        "Use sound devices (alliteration, assonance, internal rhyme) "
                        "with restraint",
                        "Let each line earn its place; cut filler words",
                    ]
                ),
                "**EMOTIONAL ARC:**\n"
                + bullets(
                    [
                        "Open with a concrete image that establishes mood",
                        "Deepen or complicate the feeling in the middle",
                        "Close with a line that reframes what came before",
                    ]
                ),
                f"**GENRE GUIDANCE ({title(elements.genre)}):**\n{_genre_tip(elements.genre)}",
                "Present the poem with a title and clear stanza breaks; no commentary.",
            ]
        )
