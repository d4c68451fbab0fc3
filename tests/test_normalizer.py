"""Tests for the spelling normalizer."""

from promptcraft.engine.normalizer import SpellingNormalizer, normalize


def test_normalize_fixes_typos_pronoun_and_punctuation():
    assert normalize("i dont no if teh app will wrok") == "I don't no if the app will work."


def test_corrections_are_whole_word_only():
    result = normalize("i love thailand and ai")
    assert "thailand" in result
    assert result.endswith("AI.")


def test_collapses_whitespace_and_trims():
    assert normalize("  hello   \n world  ") == "Hello world."


def test_empty_and_blank_input():
    assert normalize("") == ""
    assert normalize("   \t ") == ""


def test_existing_terminal_punctuation_kept():
    assert normalize("what is this?") == "What is this?"
    assert normalize("do it now!") == "Do it now!"


def test_capitalizes_each_sentence():
    assert normalize("hello. world") == "Hello. World."


def test_brand_casing_preserved():
    assert normalize("build an ios app") == "Build an iOS app."
    assert normalize("iphone apps are fun") == "iPhone apps are fun."


def test_multi_letter_abbreviation_expanded():
    assert normalize("can u help") == "Can you help."


def test_custom_corrections_table():
    normalizer = SpellingNormalizer({"foo": "bar"})
    assert normalizer.normalize("foo food") == "Bar food."


def test_output_non_empty_for_non_empty_input():
    for text in ["a", "?", "x y z", "teh"]:
        assert normalize(text)
