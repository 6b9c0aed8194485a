"""Tests for the Markdown prompt templates."""

import pytest

from tonetrainer.prompts.registry import get_prompt, load_template, render


class TestRender:
    """Tests for placeholder substitution."""

    def test_fills_placeholders(self):
        assert render("Lesson: {title} ({score})", {"title": "Greetings", "score": 82}) == (
            "Lesson: Greetings (82)"
        )

    def test_values_are_not_expanded_again(self):
        result = render("{a} / {b}", {"a": "{b}", "b": "B"})

        assert result == "{b} / B"

    def test_unknown_placeholder_left_untouched(self):
        assert render("Hello {name}", {}) == "Hello {name}"


class TestGetPrompt:
    """Tests for loading templates by key."""

    def test_feedback_template_exists(self):
        template = load_template("feedback/analyze")

        assert "{lesson_title}" in template
        assert "{score}" in template

    def test_get_prompt_substitutes_all_inputs(self):
        prompt = get_prompt(
            "feedback/analyze",
            lesson_title="Numbers",
            lesson_text="一二三",
            lesson_type="word",
            score=64,
        )

        assert "Lesson: Numbers" in prompt
        assert "Text: 一二三" in prompt
        assert "Student Score: 64/100" in prompt
        assert "{" not in prompt

    def test_unknown_key(self):
        with pytest.raises(FileNotFoundError, match="Prompt not found"):
            get_prompt("feedback/does_not_exist")
