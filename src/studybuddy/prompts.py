"""Prompt templates sent to the generation endpoint."""
from __future__ import annotations

import re

FLASHCARD_COUNT = 10

_JSON_FENCE = re.compile(r"```json\s*")
_FENCE = re.compile(r"```\s*")


def summary_prompt(content: str) -> str:
    return (
        "Please provide a comprehensive summary of the following educational content.\n"
        "Focus on the main concepts, key points, and important details that a "
        "student should understand.\n"
        "Keep the summary clear, concise, and well-structured.\n\n"
        f"Content:\n{content}\n"
    )


def flashcards_prompt(content: str) -> str:
    return (
        f"Based on the following content, create {FLASHCARD_COUNT} educational "
        "flashcards in JSON format.\n"
        'Each flashcard should have a "question" and an "answer".\n'
        "Focus on key concepts, definitions, and important facts.\n\n"
        "Return ONLY valid JSON in this exact format (no additional text or markdown):\n"
        "[\n"
        '  {"question": "What is...", "answer": "It is..."},\n'
        '  {"question": "Define...", "answer": "..."}\n'
        "]\n\n"
        f"Content:\n{content}\n"
    )


def answer_prompt(content: str, question: str) -> str:
    return (
        "Based on the following document content, please answer this question:\n\n"
        f"Question: {question}\n\n"
        f"Document Content:\n{content}\n\n"
        "Provide a clear and helpful answer based only on the document.\n"
        "If the answer is not in the document, say so.\n"
    )


def strip_code_fences(raw: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return _FENCE.sub("", _JSON_FENCE.sub("", raw)).strip()
