"""Turns raw model text into question/answer pairs.

Model output is untrusted: it may be wrapped in a code fence, may not be JSON,
or may contain entries of the wrong shape. Entries that are not text pairs are
dropped; when nothing usable remains the result is a single sentinel card.
Nothing here raises.
"""

from __future__ import annotations

import json
import re
from typing import Any

from app.core.logging import get_logger
from app.modules.flashcards.models.flashcards import (
    FlashcardPair,
    NormalizationResult,
    NormalizedFlashcards,
    SentinelFailure,
)

logger = get_logger(__name__)

SENTINEL_QUESTION = "Failed to generate structured flashcards"
UNPARSEABLE_ANSWER = (
    "The AI response could not be processed. Please check the logs or try again."
)
WRONG_SHAPE_ANSWER = (
    'The AI response did not match the expected JSON structure (an object with a "flashcards" array).'
)
NO_VALID_ENTRIES_ANSWER = (
    "The AI response did not contain any valid question/answer pairs."
)

_FENCE_OPEN_RE = re.compile(r"^```[\w-]*[ \t]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if _FENCE_OPEN_RE.match(cleaned):
        cleaned = _FENCE_OPEN_RE.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _sentinel(reason: str, answer: str) -> SentinelFailure:
    return SentinelFailure(
        reason=reason,
        sentinel=FlashcardPair(question=SENTINEL_QUESTION, answer=answer),
    )


def _coerce_entry(entry: Any) -> FlashcardPair | None:
    if not isinstance(entry, dict):
        return None
    question = entry.get("question")
    answer = entry.get("answer")
    if not isinstance(question, str) or not isinstance(answer, str):
        return None
    question, answer = question.strip(), answer.strip()
    if not question or not answer:
        return None
    return FlashcardPair(question=question, answer=answer)


def normalize_response(raw_text: str) -> NormalizationResult:
    cleaned = strip_code_fence(raw_text or "")

    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.warning("Could not parse model output as JSON (%s): %r", e, cleaned[:500])
        return _sentinel("unparseable", UNPARSEABLE_ANSWER)

    entries = parsed.get("flashcards") if isinstance(parsed, dict) else None
    if not isinstance(entries, list):
        logger.warning("Model output has no flashcards array: %r", cleaned[:500])
        return _sentinel("wrong_shape", WRONG_SHAPE_ANSWER)

    cards = [card for card in map(_coerce_entry, entries) if card is not None]
    dropped = len(entries) - len(cards)
    if dropped:
        logger.info("Dropped %d malformed flashcard entries", dropped)

    if not cards:
        return _sentinel("no_valid_entries", NO_VALID_ENTRIES_ANSWER)
    return NormalizedFlashcards(flashcards=cards)


def normalize(raw_text: str) -> list[FlashcardPair]:
    """Always returns at least one pair."""
    return normalize_response(raw_text).flashcards
