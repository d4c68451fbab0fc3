"""Base classes shared by the template generators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from ..engine.models import (
    EnhancementOptions,
    Intent,
    Length,
    RequestType,
    StoryElements,
    Tone,
)


@dataclass(frozen=True)
class LengthScale:
    """Three-tier target size for one generator.

    The unit is whatever the template counts (words, lines, ideas, screens).
    """

    unit: str
    concise: Tuple[int, int]
    balanced: Tuple[int, int]
    detailed: Tuple[int, int]

    def bounds(self, length: Length) -> Tuple[int, int]:
        return {
            Length.CONCISE: self.concise,
            Length.BALANCED: self.balanced,
            Length.DETAILED: self.detailed,
        }[length]

    def range(self, length: Length) -> str:
        low, high = self.bounds(length)
        return f"{low}-{high}"

    def describe(self, length: Length) -> str:
        return f"{self.range(length)} {self.unit}"


@dataclass(frozen=True)
class GenerationContext:
    """Everything a generator may interpolate."""

    intent: Intent
    options: EnhancementOptions
    elements: Optional[StoryElements] = None

    @property
    def subject(self) -> str:
        return self.intent.subject

    @property
    def length(self) -> Length:
        return self.options.length

    def detail(self, key: str, default: Any = None) -> Any:
        value = self.intent.details.get(key)
        return default if value is None else value


TONE_GUIDANCE = {
    Tone.PROFESSIONAL: "Use a professional and formal tone.",
    Tone.CASUAL: "Use a friendly and conversational tone.",
    Tone.ACADEMIC: "Use an academic and scholarly tone with precise terminology.",
    Tone.CREATIVE: "Use a creative and imaginative tone.",
    Tone.TECHNICAL: "Use a technical and detailed tone with specific terminology.",
}

MODEL_NOTES = {
    "all": "Optimize the response for general use with any AI model.",
    "chatgpt": "Optimized for ChatGPT: use clear headings and numbered steps.",
    "gpt4": "Optimized for GPT-4: take advantage of long-context, multi-step reasoning.",
    "gpt5": "Optimized for GPT-5: leverage its advanced reasoning capabilities.",
    "claude": "Optimized for Claude: structured sections and explicit constraints work best.",
    "gemini": "Optimized for Gemini: keep instructions explicit and grouped by task.",
}


def model_note(model: str) -> str:
    """Target-model note; unknown models get a generic label."""
    key = (model or "all").strip().lower().replace("-", "").replace(" ", "")
    if key in MODEL_NOTES:
        return MODEL_NOTES[key]
    return f"Optimized for {model.strip()}."


def bullets(items: Iterable[str], marker: str = "•", indent: str = "") -> str:
    return "\n".join(f"{indent}{marker} {item}" for item in items)


def title(text: str) -> str:
    return text[:1].upper() + text[1:]


class PromptGenerator(ABC):
    """Base class for one request type's template.

    Subclasses set ``request_type`` and ``length_scale`` and implement
    ``build``; ``render`` appends the tone and target-model footer shared by
    every template.
    """

    request_type: RequestType
    length_scale: LengthScale
    needs_entities: bool = False

    @property
    def generator_id(self) -> str:
        return self.request_type.value

    @abstractmethod
    def build(self, context: GenerationContext) -> str:
        """Return the type-specific body of the enhanced prompt."""
        pass

    def target(self, context: GenerationContext) -> str:
        """Human readable size target for the requested length."""
        return self.length_scale.describe(context.length)

    def render(self, context: GenerationContext) -> str:
        body = self.build(context).strip()
        text = f"{body}\n\n{self._footer(context)}"

        if context.subject not in text:
            raise RuntimeError(
                f"{type(self).__name__} dropped the subject from its output"
            )
        return text

    def _footer(self, context: GenerationContext) -> str:
        return (
            "**STYLE & TARGET:**\n"
            f"• Tone: {TONE_GUIDANCE[context.options.tone]}\n"
            f"• Target model: {model_note(context.options.model)}"
        )
