from .flashcards import (
    FlashcardPair,
    NormalizationResult,
    NormalizedFlashcards,
    SentinelFailure,
)
from .batches import FlashcardBatch, GeneratedBatch

__all__ = [
    "FlashcardPair",
    "NormalizationResult",
    "NormalizedFlashcards",
    "SentinelFailure",
    "FlashcardBatch",
    "GeneratedBatch",
]
