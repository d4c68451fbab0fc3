"""Template generators, one per request type."""

from typing import Dict, Type

from ..engine.models import RequestType
from .base import GenerationContext, LengthScale, PromptGenerator
from .code import CodeWritingGenerator, DebuggingGenerator
from .creative import CreativeWritingGenerator, PoetryGenerator
from .development import AppDevelopmentGenerator, WebDevelopmentGenerator
from .general import (
    BrainstormingGenerator,
    ExplanationGenerator,
    GeneralGenerator,
    ImageGenerationGenerator,
)
from .writing import BusinessWritingGenerator, ContentWritingGenerator

GENERATOR_REGISTRY: Dict[RequestType, Type[PromptGenerator]] = {
    RequestType.CREATIVE_WRITING: CreativeWritingGenerator,
    RequestType.POETRY: PoetryGenerator,
    RequestType.APP_DEVELOPMENT: AppDevelopmentGenerator,
    RequestType.WEB_DEVELOPMENT: WebDevelopmentGenerator,
    RequestType.CODE_WRITING: CodeWritingGenerator,
    RequestType.DEBUGGING: DebuggingGenerator,
    RequestType.CONTENT_WRITING: ContentWritingGenerator,
    RequestType.BUSINESS_WRITING: BusinessWritingGenerator,
    RequestType.EXPLANATION: ExplanationGenerator,
    RequestType.BRAINSTORMING: BrainstormingGenerator,
    RequestType.IMAGE_GENERATION: ImageGenerationGenerator,
    RequestType.GENERAL: GeneralGenerator,
}

__all__ = [
    "GenerationContext",
    "LengthScale",
    "PromptGenerator",
    "CreativeWritingGenerator",
    "PoetryGenerator",
    "AppDevelopmentGenerator",
    "WebDevelopmentGenerator",
    "CodeWritingGenerator",
    "DebuggingGenerator",
    "ContentWritingGenerator",
    "BusinessWritingGenerator",
    "ExplanationGenerator",
    "BrainstormingGenerator",
    "ImageGenerationGenerator",
    "GeneralGenerator",
    "GENERATOR_REGISTRY",
]
