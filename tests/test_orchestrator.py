"""Tests for the enhancement pipeline."""

import pytest

import promptcraft
from promptcraft.engine.models import EnhancementOptions, Length, RequestType, Tone
from promptcraft.engine.orchestrator import EnhancementOrchestrator
from promptcraft.utils.exceptions import EmptyPromptError, PromptTooLongError


@pytest.fixture
def orchestrator():
    return EnhancementOrchestrator()


class TestValidation:
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t", None, 42])
    def test_empty_or_non_string_rejected(self, orchestrator, prompt):
        with pytest.raises(EmptyPromptError) as exc_info:
            orchestrator.enhance(prompt)
        assert exc_info.value.code == "MISSING_PROMPT"
        assert str(exc_info.value) == "Prompt is required"

    def test_too_long_rejected(self):
        orchestrator = EnhancementOrchestrator(max_length=20)
        with pytest.raises(PromptTooLongError) as exc_info:
            orchestrator.enhance("x" * 21)
        assert exc_info.value.code == "PROMPT_TOO_LONG"
        assert exc_info.value.max_length == 20
        assert exc_info.value.length == 21

    def test_length_checked_after_trimming(self):
        orchestrator = EnhancementOrchestrator(max_length=5)
        assert orchestrator.validate("  hello  ") == "hello"

    def test_max_length_from_environment(self, monkeypatch):
        monkeypatch.setenv("PROMPT_MAX_LENGTH", "50")
        assert EnhancementOrchestrator().max_length == 50


@pytest.mark.parametrize(
    "prompt",
    [
        "a",
        "?",
        "teh",
        "write a story",
        "build an app",
        "explain",
        "🙂🙂🙂",
        "x" * 10000,
    ],
)
def test_enhance_is_total(orchestrator, prompt):
    result = orchestrator.enhance(prompt)
    assert result.text
    assert result.request_type in set(RequestType)
    assert result.output_length == len(result.text)
    assert result.input_length == len(prompt.strip())


def test_creative_scenario(orchestrator):
    result = orchestrator.enhance(
        "write a story about a dragon guarding ancient treasure in a cave",
        {"length": "concise"},
    )
    assert result.request_type is RequestType.CREATIVE_WRITING
    assert [c.name for c in result.elements.characters] == ["dragon"]
    assert [s.name for s in result.elements.settings] == ["cave"]
    assert "800-1200 words" in result.text
    for section in ("CHARACTER REQUIREMENTS", "SETTING REQUIREMENTS", "THEMATIC EXPLORATION",
                    "NARRATIVE STRUCTURE"):
        assert section in result.text


def test_debugging_scenario(orchestrator):
    result = orchestrator.enhance("my api call keeps returning a 500 error, fix it")
    assert result.request_type is RequestType.DEBUGGING
    assert result.elements is None
    assert "ROOT CAUSE" in result.text
    assert "THE FIX" in result.text
    assert "PREVENTION" in result.text


def test_default_fallback_scenario(orchestrator):
    result = orchestrator.enhance("Describe something interesting")
    assert result.request_type is RequestType.CREATIVE_WRITING
    assert result.elements.primary_character.name == "protagonist"
    assert len(result.elements.themes) >= 1
    assert "QUALITY STANDARDS" in result.text


def test_priority_ordering(orchestrator):
    result = orchestrator.enhance("write a blog post about a brave dragon")
    assert result.request_type is RequestType.CONTENT_WRITING


def test_length_monotonicity(orchestrator):
    prompt = "write a story about a wizard in a tower"
    scale = orchestrator._generators[RequestType.CREATIVE_WRITING].length_scale
    lows = []
    for length in Length:
        result = orchestrator.enhance(prompt, EnhancementOptions(length=length))
        assert result.request_type is RequestType.CREATIVE_WRITING
        assert scale.describe(length) in result.text
        lows.append(scale.bounds(length)[0])
    assert lows == sorted(lows)


def test_prompt_is_normalized_before_templating(orchestrator):
    result = orchestrator.enhance("write a story about teh dragon")
    assert "the dragon" in result.text
    assert "teh" not in result.text


class TestOptions:
    def test_unknown_values_fall_back(self):
        options = EnhancementOptions.from_mapping(
            {"tone": "sarcastic", "length": "epic", "model": "", "detailLevel": "everything"}
        )
        assert options == EnhancementOptions()

    def test_case_insensitive_values(self):
        options = EnhancementOptions.from_mapping({"tone": "CASUAL", "length": " Detailed "})
        assert options.tone is Tone.CASUAL
        assert options.length is Length.DETAILED

    def test_defaults(self):
        options = EnhancementOptions()
        assert options.tone is Tone.PROFESSIONAL
        assert options.length is Length.BALANCED
        assert options.model == "all"
        assert options.detail_level.value == "full_code"


def test_to_dict_boundary_shape(orchestrator):
    payload = orchestrator.enhance("hello there").to_dict()
    assert set(payload) == {"enhancedPrompt", "metadata"}
    assert set(payload["metadata"]) == {"requestType", "inputLength", "outputLength", "timestamp"}
    assert payload["metadata"]["requestType"] == "general"


def test_module_level_helpers():
    assert promptcraft.classify("what is a black hole").type is RequestType.EXPLANATION
    assert promptcraft.enhance("what is a black hole").request_type is RequestType.EXPLANATION
    assert promptcraft.normalize("hi") == "Hi."
