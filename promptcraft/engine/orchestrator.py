"""Normalizer -> classifier -> extractor -> generator pipeline."""

import logging
import os
from typing import Any, Dict, Optional, Union

from ..generators import GENERATOR_REGISTRY, GenerationContext, PromptGenerator
from ..utils.exceptions import EmptyPromptError, PromptTooLongError
from .classifier import IntentClassifier
from .entities import extract_story_elements
from .models import EnhancedPrompt, EnhancementOptions, Intent, RequestType
from .normalizer import SpellingNormalizer

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 10000

OptionsLike = Union[EnhancementOptions, Dict[str, Any], None]


def _coerce_options(options: OptionsLike) -> EnhancementOptions:
    if isinstance(options, EnhancementOptions):
        return options
    return EnhancementOptions.from_mapping(options)


class EnhancementOrchestrator:
    """Turns a raw prompt into an EnhancedPrompt.

    Stateless apart from the read-only collaborators created here, so one
    instance can serve concurrent callers.
    """

    def __init__(
        self,
        max_length: Optional[int] = None,
        normalizer: Optional[SpellingNormalizer] = None,
        classifier: Optional[IntentClassifier] = None,
    ):
        self.max_length = max_length or int(os.getenv("PROMPT_MAX_LENGTH", DEFAULT_MAX_LENGTH))
        self.normalizer = normalizer or SpellingNormalizer()
        self.classifier = classifier or IntentClassifier()
        self._generators: Dict[RequestType, PromptGenerator] = {
            request_type: generator_cls()
            for request_type, generator_cls in GENERATOR_REGISTRY.items()
        }

    def validate(self, prompt: Any) -> str:
        """Return the trimmed prompt or raise a validation error."""
        if not isinstance(prompt, str) or not prompt.strip():
            raise EmptyPromptError()
        trimmed = prompt.strip()
        if len(trimmed) > self.max_length:
            raise PromptTooLongError(len(trimmed), self.max_length)
        return trimmed

    def classify(self, prompt: str) -> Intent:
        return self.classifier.classify(self.normalizer.normalize(self.validate(prompt)))

    def enhance(self, prompt: str, options: OptionsLike = None) -> EnhancedPrompt:
        raw = self.validate(prompt)
        opts = _coerce_options(options)

        normalized = self.normalizer.normalize(raw)
        intent = self.classifier.classify(normalized)
        generator = self._generators[intent.type]

        elements = extract_story_elements(normalized) if generator.needs_entities else None
        context = GenerationContext(intent=intent, options=opts, elements=elements)
        text = generator.render(context)

        logger.debug(
            "Enhanced prompt with %s generator (%d -> %d chars)",
            generator.generator_id,
            len(raw),
            len(text),
        )
        return EnhancedPrompt(
            text=text,
            request_type=intent.type,
            input_length=len(raw),
            output_length=len(text),
            intent=intent,
            elements=elements,
        )


_default: Optional[EnhancementOrchestrator] = None


def get_orchestrator() -> EnhancementOrchestrator:
    """Return the process-wide orchestrator, creating it on first use."""
    global _default
    if _default is None:
        _default = EnhancementOrchestrator()
    return _default


def enhance(prompt: str, options: OptionsLike = None) -> EnhancedPrompt:
    return get_orchestrator().enhance(prompt, options)


def classify(prompt: str) -> Intent:
    return get_orchestrator().classify(prompt)
