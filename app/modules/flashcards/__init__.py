"""Flashcards module exports."""

from .models.flashcards import FlashcardPair, NormalizedFlashcards, SentinelFailure
from .generator import generate_flashcards
from .main import FlashcardBatchGenerator, group_into_batches
from .normalizer import normalize, normalize_response
from .prompts import build_prompt

__all__ = [
    "FlashcardPair",
    "NormalizedFlashcards",
    "SentinelFailure",
    "generate_flashcards",
    "FlashcardBatchGenerator",
    "group_into_batches",
    "normalize",
    "normalize_response",
    "build_prompt",
]
