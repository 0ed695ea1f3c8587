"""
Tests for prompt templates and flashcard output cleanup.
"""

import pytest

from studybuddy.prompts import (
    FLASHCARD_COUNT,
    answer_prompt,
    flashcards_prompt,
    strip_code_fences,
    summary_prompt,
)

CONTENT = "Mitochondria are the powerhouse of the cell.\nThey produce ATP."


class TestTemplates:
    def test_summary_embeds_content(self):
        prompt = summary_prompt(CONTENT)
        assert CONTENT in prompt
        assert "summary" in prompt.lower()

    def test_flashcards_demands_raw_json(self):
        prompt = flashcards_prompt(CONTENT)
        assert CONTENT in prompt
        assert str(FLASHCARD_COUNT) in prompt
        assert '"question"' in prompt and '"answer"' in prompt
        assert "no additional text or markdown" in prompt

    def test_answer_embeds_question_and_content(self):
        prompt = answer_prompt(CONTENT, "What do mitochondria produce?")
        assert CONTENT in prompt
        assert "Question: What do mitochondria produce?" in prompt
        assert "If the answer is not in the document, say so." in prompt

    def test_templates_are_pure(self):
        assert summary_prompt(CONTENT) == summary_prompt(CONTENT)
        assert answer_prompt(CONTENT, "q") == answer_prompt(CONTENT, "q")


class TestStripCodeFences:
    @pytest.mark.parametrize(
        "raw",
        [
            '```json\n[{"question":"Q","answer":"A"}]\n```',
            '```\n[{"question":"Q","answer":"A"}]\n```\n',
            '  [{"question":"Q","answer":"A"}]  ',
            '[{"question":"Q","answer":"A"}]',
        ],
    )
    def test_fences_and_whitespace_removed(self, raw):
        assert strip_code_fences(raw) == '[{"question":"Q","answer":"A"}]'
