"""Tests for tool prompt construction."""

import pytest

from nyx_ai.services.prompts import TEMPLATES, Tool, build_prompt


def test_every_tool_has_a_template():
    assert set(TEMPLATES) == set(Tool)
    assert len(Tool) == 31


@pytest.mark.parametrize("tool", [t.value for t in Tool])
def test_templates_embed_the_text(tool):
    prompt = build_prompt(tool, "SOURCE TEXT")
    assert "SOURCE TEXT" in prompt
    assert not prompt.startswith("Process this text for")


def test_summarize_defaults():
    assert build_prompt("summarize", "abc") == (
        "Summarize this text:\n\nabc\n\nPlease summarize as paragraph with approximately 50% length."
    )


def test_summary_length_is_not_clamped():
    assert "approximately 250% length" in build_prompt("summarize", "abc", summary_length=250)
    assert "approximately -5% length" in build_prompt("summarize", "abc", summary_length=-5)


def test_options_feed_the_right_tools():
    assert build_prompt("tone", "hey", summary_type="formal").startswith("Rewrite this text in a formal tone:")
    assert build_prompt("flashcards", "cells", summary_length=10).startswith("Create 10 flashcards")
    assert build_prompt("quiz", "cells", "multiple-choice", 5).startswith(
        "Create a 5-question multiple-choice quiz"
    )
    assert build_prompt("citation", "a book", summary_type="APA").startswith("Generate APA style citations")


def test_tutor_quotes_the_question():
    assert build_prompt("tutor", "what is entropy?") == (
        'Act as a personal tutor. The user asks: "what is entropy?"\n\n'
        "Provide clear explanation, examples, and practice questions."
    )


def test_unknown_tool_falls_back():
    assert build_prompt("translate", "hola") == "Process this text for translate:\n\nhola"
