"""Pydantic models for generated flashcards.

A normalization run ends in one of two outcomes: ``NormalizedFlashcards`` when
the model produced usable pairs, or ``SentinelFailure`` when it did not. Both
expose ``flashcards`` so callers can treat the sentinel as ordinary data.
"""

from typing import Literal, Union

from pydantic import BaseModel


class FlashcardPair(BaseModel):
    """Simple question/answer flashcard."""

    question: str
    answer: str


class NormalizedFlashcards(BaseModel):
    outcome: Literal["ok"] = "ok"
    flashcards: list[FlashcardPair]

    @property
    def degraded(self) -> bool:
        return False


class SentinelFailure(BaseModel):
    """Placeholder card standing in for output that could not be used."""

    outcome: Literal["sentinel"] = "sentinel"
    reason: str
    sentinel: FlashcardPair

    @property
    def flashcards(self) -> list[FlashcardPair]:
        return [self.sentinel]

    @property
    def degraded(self) -> bool:
        return True


NormalizationResult = Union[NormalizedFlashcards, SentinelFailure]
