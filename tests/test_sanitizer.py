"""Tests for answer text cleaning."""

import pytest

from client.features.conversation.sanitizer import (
    APOLOGY_MESSAGE,
    UNKNOWN_ANSWER_PHRASES,
    clean,
)


@pytest.mark.parametrize("phrase", UNKNOWN_ANSWER_PHRASES)
def test_unknown_phrase_any_casing_returns_apology(phrase):
    assert clean(phrase) == APOLOGY_MESSAGE
    assert clean(phrase.upper()) == APOLOGY_MESSAGE
    assert clean(f"  Sorry, {phrase.title()} in the docs.  ") == APOLOGY_MESSAGE


def test_apology_text_is_exact():
    assert APOLOGY_MESSAGE == (
        "I wish I could help with that, but I don’t have the answer to that "
        "right now based on context provided."
    )


def test_regular_answer_is_trimmed():
    assert clean("  STAC is a spec for geospatial assets.\n") == (
        "STAC is a spec for geospatial assets."
    )


def test_inner_whitespace_is_preserved():
    assert clean("line one\n\nline two") == "line one\n\nline two"


@pytest.mark.parametrize("value", [None, "", 42, ["i don't know"], {"openai": "x"}])
def test_missing_or_non_string_returns_empty(value):
    assert clean(value) == ""
