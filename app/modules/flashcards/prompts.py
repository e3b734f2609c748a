"""Prompt construction for flashcard generation."""

from __future__ import annotations

# Leaves headroom for the instructions inside the model's context window
MAX_CONTENT_CHARS = 7500
DEFAULT_CARD_COUNT = 5
MIN_CARD_COUNT = 1
MAX_CARD_COUNT = 50

SYSTEM_PROMPT = (
    "You are an AI assistant that generates flashcards from text and strictly "
    "follows JSON output format instructions."
)

_EXAMPLE_OUTPUT = """{
  "flashcards": [
    { "question": "What is the capital of France?", "answer": "Paris" },
    { "question": "Explain photosynthesis.", "answer": "The process plants use to convert light energy into chemical energy." }
  ]
}"""


def truncate_for_prompt(content: str, limit: int = MAX_CONTENT_CHARS) -> str:
    return content[:limit]


def build_prompt(content: str, count: int) -> str:
    """Build the user prompt asking for exactly ``count`` cards about ``content``."""
    if count < 1:
        raise ValueError("count must be a positive integer")

    body = truncate_for_prompt(content)
    return (
        "You are an AI assistant specialized in creating educational flashcards.\n"
        f"Analyze the following content and generate exactly {count} flashcards.\n"
        'Each flashcard must be an object with only two keys: "question" and "answer".\n'
        "Focus on the most important concepts, definitions, facts, and relationships in the text.\n"
        "Questions should be clear and specific. Answers should be concise yet complete.\n"
        "\n"
        "Content to analyze:\n"
        "---\n"
        f"{body}\n"
        "---\n"
        "\n"
        'Your response MUST be ONLY a valid JSON object containing a single key "flashcards" '
        "whose value is an array of the generated flashcard objects.\n"
        "Do NOT include any text, explanations, or markdown formatting before or after the JSON object.\n"
        "\n"
        "Example of the required JSON output format:\n"
        f"{_EXAMPLE_OUTPUT}\n"
    )
