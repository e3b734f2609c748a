"""Models for flashcard batches (cards sharing one batch id)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.core.db.schemas.flashcards import Flashcard


@dataclass
class GeneratedBatch:
    """Outcome of one generation call after the rows were written."""

    batch_id: str
    flashcards: list[Flashcard]
    degraded: bool = False


@dataclass
class FlashcardBatch:
    batch_id: str
    note_id: Optional[str]
    note_title: Optional[str]
    created_at: str
    cards: list[Flashcard] = field(default_factory=list)
