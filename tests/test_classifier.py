"""Tests for the rule-table intent classifier."""

import re

import pytest

from promptcraft.engine.classifier import (
    DEFAULT_RULES,
    IntentClassifier,
    Rule,
    classify,
    detect_language,
    detect_platform,
    narrow_subject,
)
from promptcraft.engine.models import RequestType


@pytest.mark.parametrize(
    "prompt, expected",
    [
        ("write a story about a dragon guarding ancient treasure in a cave", RequestType.CREATIVE_WRITING),
        ("Describe something interesting", RequestType.CREATIVE_WRITING),
        ("write a haiku about autumn rain", RequestType.POETRY),
        ("write a blog post about a brave dragon", RequestType.CONTENT_WRITING),
        ("draft an email to my team about the launch delay", RequestType.BUSINESS_WRITING),
        ("build a web app for recipes", RequestType.WEB_DEVELOPMENT),
        ("build an iphone app where users can log in and chat", RequestType.APP_DEVELOPMENT),
        ("write a python function to reverse a linked list", RequestType.CODE_WRITING),
        ("my api call keeps returning a 500 error, fix it", RequestType.DEBUGGING),
        ("generate an image of a sunset over mountains", RequestType.IMAGE_GENERATION),
        ("give me ideas for a birthday party", RequestType.BRAINSTORMING),
        ("what is quantum computing", RequestType.EXPLANATION),
        ("hello there", RequestType.GENERAL),
    ],
)
def test_example_phrasings(prompt, expected):
    assert classify(prompt).type is expected


class TestPrecedence:
    """Overlapping keywords resolve by table order."""

    def test_content_beats_creative(self):
        assert classify("write a blog post about a brave dragon").type is RequestType.CONTENT_WRITING

    def test_leading_explanation_beats_app(self):
        intent = classify("explain how to build an app")
        assert intent.type is RequestType.EXPLANATION
        assert intent.subject == "how to build an app"

    def test_poetry_beats_creative(self):
        assert classify("write a poem about a dragon").type is RequestType.POETRY

    def test_debugging_beats_code(self):
        assert classify("fix the bug in my python script").type is RequestType.DEBUGGING

    @pytest.mark.parametrize(
        "prompt, expected",
        [
            ("write a poem about a broken heart", RequestType.POETRY),
            ("write a story about a knight who fails his quest", RequestType.CREATIVE_WRITING),
            ("write a story about a robot that keeps crashing into walls", RequestType.CREATIVE_WRITING),
            ("write a poem about a bug on a leaf", RequestType.POETRY),
        ],
    )
    def test_fault_words_without_software_context_are_not_debugging(self, prompt, expected):
        assert classify(prompt).type is expected

    @pytest.mark.parametrize(
        "prompt",
        [
            "my app crashes when I open the camera",
            "the login endpoint fails with status code 401",
            "fix the broken query in my sql",
            "getting a traceback when importing numpy",
        ],
    )
    def test_fault_words_with_software_context_are_debugging(self, prompt):
        assert classify(prompt).type is RequestType.DEBUGGING

    @pytest.mark.parametrize(
        "prompt",
        [
            "write a story about a girl named Ruby",
            "write a story about a swift river",
            "write a story about a class trip to the museum",
            "write a story about a python that escapes the zoo",
            "write a story about a TV program that changes a town",
        ],
    )
    def test_everyday_words_are_not_code(self, prompt):
        assert classify(prompt).type is RequestType.CREATIVE_WRITING

    @pytest.mark.parametrize(
        "prompt, language",
        [
            ("create a python class for bank accounts", "Python"),
            ("build a booking backend with ruby on rails", "Ruby"),
            ("write a script that renames files", None),
            ("sort a list of numbers in rust", "Rust"),
        ],
    )
    def test_code_words_in_programming_context(self, prompt, language):
        intent = classify(prompt)
        assert intent.type is RequestType.CODE_WRITING
        assert intent.details["language"] == language

    def test_web_beats_app(self):
        assert classify("create a web application for my shop").type is RequestType.WEB_DEVELOPMENT

    def test_table_ends_with_catch_all(self):
        assert DEFAULT_RULES[-1].request_type is RequestType.GENERAL
        assert DEFAULT_RULES[-1].matches("")


class TestSubjectNarrowing:
    def test_story_prefix_stripped(self):
        intent = classify("write a story about a dragon guarding ancient treasure in a cave")
        assert intent.subject == "a dragon guarding ancient treasure in a cave"
        assert intent.slot == "subject"

    def test_blog_prefix_stripped(self):
        intent = classify("write a blog post about a brave dragon")
        assert intent.subject == "a brave dragon"
        assert intent.slot == "topic"

    def test_write_about_character(self):
        intent = classify("write about a robot")
        assert intent.type is RequestType.CREATIVE_WRITING
        assert intent.subject == "a robot"

    def test_polite_lead_is_skipped(self):
        intent = classify("please write a haiku about autumn rain.")
        assert intent.subject == "autumn rain"

    def test_missing_prefix_falls_back_to_whole_prompt(self):
        intent = classify("my api call keeps returning a 500 error, fix it")
        assert intent.subject == "my api call keeps returning a 500 error, fix it"
        assert intent.slot == "problem"

    def test_narrow_subject_never_returns_empty(self):
        pattern = re.compile(r"^write\s*", re.IGNORECASE)
        assert narrow_subject("write", [pattern]) == "write"
        assert narrow_subject("  hello world!  ") == "hello world"


class TestDetails:
    def test_app_details(self):
        intent = classify("build an iphone app where users can log in and chat")
        assert intent.details["platform"] == "iOS"
        assert intent.details["app_type"] == "social"
        assert "User Authentication" in intent.details["features"]
        assert len(intent.details["features"]) == len(set(intent.details["features"]))

    def test_web_platform(self):
        assert classify("build a web app for recipes").details["platform"] == "Web"

    def test_code_language(self):
        assert classify("write a python function to reverse a linked list").details["language"] == "Python"

    def test_debugging_without_language(self):
        assert classify("my api call keeps returning a 500 error, fix it").details["language"] is None

    def test_poetry_form(self):
        assert classify("write a haiku about autumn rain").details["form"] == "haiku"
        assert classify("write a poem about the sea").details["form"] == "poem"

    def test_business_document(self):
        assert classify("draft an email to my team about the launch delay").details["document"] == "email"


def test_detect_platform():
    assert detect_platform("an android app") == "Android"
    assert detect_platform("a swiftui app for ipad") == "iOS"
    assert detect_platform("a mobile app") == "Cross-platform"


def test_detect_language_ignores_partial_words():
    assert detect_language("use c# for this") == "C#"
    assert detect_language("a rusty old script") is None
    assert detect_language("write it in rust") == "Rust"


def test_detect_language_needs_context_for_everyday_words():
    assert detect_language("a girl named ruby") is None
    assert detect_language("a swift river at dawn") is None
    assert detect_language("a swift app for notes") == "Swift"
    assert detect_language("ruby on rails") == "Ruby"
    assert detect_language("read a csv with pandas") == "Python"
    assert detect_language("kotlin") == "Kotlin"


def test_classification_is_idempotent():
    prompt = "build a web app for recipes"
    assert classify(prompt) == classify(prompt)


def test_custom_rule_table_without_catch_all():
    classifier = IntentClassifier(rules=())
    intent = classifier.classify("anything at all")
    assert intent.type is RequestType.GENERAL
    assert intent.subject == "anything at all"


def test_custom_rule_table_order_is_respected():
    rules = (
        Rule(RequestType.POETRY, lambda lower: "x" in lower, slot="subject"),
        Rule(RequestType.GENERAL, lambda lower: True, slot="prompt"),
    )
    assert IntentClassifier(rules=rules).classify("x marks the spot").type is RequestType.POETRY
    assert IntentClassifier(rules=rules).classify("nothing").type is RequestType.GENERAL
