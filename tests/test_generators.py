"""Tests for the template generators."""

import pytest

from promptcraft.engine.classifier import classify
from promptcraft.engine.entities import extract_story_elements
from promptcraft.engine.models import (
    DetailLevel,
    EnhancementOptions,
    Intent,
    Length,
    RequestType,
    Tone,
)
from promptcraft.generators import GENERATOR_REGISTRY, GenerationContext, LengthScale
from promptcraft.generators.base import PromptGenerator, model_note

SUBJECT = "a quirky subject line 42"


def _context(request_type, subject=SUBJECT, details=None, **options):
    intent = Intent(type=request_type, subject=subject, details=details or {})
    elements = None
    if GENERATOR_REGISTRY[request_type].needs_entities:
        elements = extract_story_elements(subject)
    return GenerationContext(
        intent=intent, options=EnhancementOptions(**options), elements=elements
    )


def test_registry_covers_every_request_type():
    assert set(GENERATOR_REGISTRY) == set(RequestType)
    for request_type, generator_cls in GENERATOR_REGISTRY.items():
        assert generator_cls.request_type is request_type


@pytest.mark.parametrize("request_type", list(RequestType))
def test_length_scale_is_strictly_increasing(request_type):
    scale = GENERATOR_REGISTRY[request_type].length_scale
    concise, balanced, detailed = (scale.bounds(length) for length in Length)
    for low, high in (concise, balanced, detailed):
        assert low <= high
    assert concise[0] < balanced[0] < detailed[0]
    assert concise[1] < balanced[1] < detailed[1]


@pytest.mark.parametrize("request_type", list(RequestType))
@pytest.mark.parametrize("length", list(Length))
def test_output_contains_subject_and_target(request_type, length):
    generator = GENERATOR_REGISTRY[request_type]()
    text = generator.render(_context(request_type, length=length))
    assert SUBJECT in text
    low, high = generator.length_scale.bounds(length)
    assert f"{low}-{high}" in text
    assert "**STYLE & TARGET:**" in text


def test_length_scale_formatting():
    scale = LengthScale("words", (1, 2), (3, 4), (5, 6))
    assert scale.range(Length.BALANCED) == "3-4"
    assert scale.describe(Length.DETAILED) == "5-6 words"


def test_creative_sections_for_concise_dragon():
    subject = "a dragon guarding ancient treasure in a cave"
    text = GENERATOR_REGISTRY[RequestType.CREATIVE_WRITING]().render(
        _context(RequestType.CREATIVE_WRITING, subject=subject, length=Length.CONCISE)
    )
    assert "800-1200 words" in text
    for section in (
        "**CHARACTER REQUIREMENTS:**",
        "**SETTING REQUIREMENTS:**",
        "**THEMATIC EXPLORATION",
        "**NARRATIVE STRUCTURE:**",
    ):
        assert section in text
    assert "Wyvern" in text
    assert "Environment: Cave" in text
    assert "**GENRE GUIDANCE (Fantasy):**" in text


def test_creative_without_setting_uses_generic_guidance():
    text = GENERATOR_REGISTRY[RequestType.CREATIVE_WRITING]().render(
        _context(RequestType.CREATIVE_WRITING, subject="something interesting")
    )
    assert "protagonist" in text
    assert "Create a vivid, immersive environment" in text
    assert "**Identity**" in text


def test_creative_supporting_cast():
    text = GENERATOR_REGISTRY[RequestType.CREATIVE_WRITING]().render(
        _context(RequestType.CREATIVE_WRITING, subject="a wizard and a dragon")
    )
    assert "**SUPPORTING CAST:**" in text


def test_poetry_uses_form_rule():
    intent = classify("write a haiku about autumn rain")
    context = GenerationContext(
        intent=intent,
        options=EnhancementOptions(),
        elements=extract_story_elements(intent.subject),
    )
    text = GENERATOR_REGISTRY[RequestType.POETRY]().render(context)
    assert "Write a haiku of approximately 16-24 lines about: autumn rain" in text
    assert "5-7-5" in text


def test_debugging_sections():
    text = GENERATOR_REGISTRY[RequestType.DEBUGGING]().render(
        _context(RequestType.DEBUGGING, details={"language": "Python"})
    )
    assert "ROOT CAUSE INVESTIGATION" in text
    assert "SOLUTION (THE FIX)" in text
    assert "PREVENTION" in text
    assert "Technology: Python" in text


class TestDetailLevel:
    def test_app_full_code_has_phases_and_permissions(self):
        details = {"platform": "Android", "app_type": "general", "features": ["Camera Access"]}
        text = GENERATOR_REGISTRY[RequestType.APP_DEVELOPMENT]().render(
            _context(RequestType.APP_DEVELOPMENT, details=details)
        )
        assert "**IMPLEMENTATION PHASES:**" in text
        assert "**PERMISSIONS REQUIRED:**" in text
        assert "```kotlin" in text
        assert "Jetpack Compose" in text

    def test_app_architecture_has_roadmap_only(self):
        details = {"platform": "iOS", "app_type": "general", "features": []}
        text = GENERATOR_REGISTRY[RequestType.APP_DEVELOPMENT]().render(
            _context(
                RequestType.APP_DEVELOPMENT,
                details=details,
                detail_level=DetailLevel.ARCHITECTURE,
            )
        )
        assert "**IMPLEMENTATION ROADMAP:**" in text
        assert "**IMPLEMENTATION PHASES:**" not in text
        assert "SwiftUI" in text

    def test_web_reference_implementation_only_in_full_code(self):
        generator = GENERATOR_REGISTRY[RequestType.WEB_DEVELOPMENT]()
        full = generator.render(_context(RequestType.WEB_DEVELOPMENT))
        brief = generator.render(
            _context(RequestType.WEB_DEVELOPMENT, detail_level=DetailLevel.ARCHITECTURE)
        )
        assert "**REFERENCE IMPLEMENTATION:**" in full
        assert "**REFERENCE IMPLEMENTATION:**" not in brief

    def test_code_shape_vs_design(self):
        generator = GENERATOR_REGISTRY[RequestType.CODE_WRITING]()
        full = generator.render(
            _context(RequestType.CODE_WRITING, details={"language": "Python"})
        )
        brief = generator.render(
            _context(
                RequestType.CODE_WRITING,
                details={"language": "Python"},
                detail_level=DetailLevel.ARCHITECTURE,
            )
        )
        assert "```python" in full
        assert "**DESIGN FIRST:**" in brief
        assert "```python" not in brief


def test_tone_and_model_footer():
    text = GENERATOR_REGISTRY[RequestType.GENERAL]().render(
        _context(RequestType.GENERAL, tone=Tone.CASUAL, model="Claude")
    )
    assert "friendly and conversational" in text
    assert "Optimized for Claude" in text


def test_model_note_unknown_model():
    assert model_note("Mistral Large") == "Optimized for Mistral Large."
    assert model_note("GPT-4") == model_note("gpt4")


def test_render_rejects_output_without_subject():
    class Broken(PromptGenerator):
        request_type = RequestType.GENERAL
        length_scale = LengthScale("words", (1, 2), (3, 4), (5, 6))

        def build(self, context):
            return "nothing useful"

    with pytest.raises(RuntimeError):
        Broken().render(_context(RequestType.GENERAL))
