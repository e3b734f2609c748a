"""Flashcard batch generation service and batch grouping.

Provides a high-level class that turns a stored note into a persisted batch of
flashcards, for use in API handlers. Storage and the completion client are
passed in so the class holds no global state.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence
from uuid import uuid4

from app.core.db.base import utc_now_iso
from app.core.db.schemas.flashcards import Flashcard
from app.core.db.schemas.notes import Note
from app.core.errors import NotFoundError, UpstreamError, ValidationError
from app.core.logging import bind_context, get_logger
from app.modules.flashcards.generator import CompletionClient, generate_flashcards
from app.modules.flashcards.models.batches import FlashcardBatch, GeneratedBatch
from app.modules.flashcards.models.flashcards import (
    FlashcardPair,
    NormalizationResult,
    SentinelFailure,
)
from app.modules.flashcards.prompts import MAX_CARD_COUNT, MIN_CARD_COUNT

logger = get_logger(__name__)

UPSTREAM_SENTINEL_QUESTION = "Error during flashcard generation"
UNKNOWN_NOTE_TITLE = "Unknown Note"


class FlashcardStorage(Protocol):
    async def find_note_by_id(self, note_id: str) -> Optional[Note]: ...

    async def insert_flashcards(self, rows: Sequence[Flashcard]) -> list[Flashcard]: ...


class FlashcardBatchGenerator:
    """Generates one batch of flashcards for a note and stores it.

    With ``persist_degraded`` set, a failed completion call or unusable model
    output still produces one stored sentinel card; otherwise both are
    reported as ``UpstreamError`` and nothing is written.
    """

    def __init__(
        self,
        storage: FlashcardStorage,
        client: CompletionClient,
        *,
        persist_degraded: bool = True,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.storage = storage
        self.client = client
        self.persist_degraded = persist_degraded
        self._new_id = id_factory
        self._now = clock

    async def _load_content(self, note_id: str) -> str:
        note = await self.storage.find_note_by_id(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        if not (note.content or "").strip():
            raise ValidationError("Failed to get content from note")
        return note.content

    async def _generate(self, content: str, count: int) -> NormalizationResult:
        try:
            return await generate_flashcards(content, count, self.client)
        except UpstreamError as e:
            if not self.persist_degraded:
                raise
            logger.warning(f"Completion failed, storing sentinel card: {e.message}")
            return SentinelFailure(
                reason=f"upstream_{e.kind}",
                sentinel=FlashcardPair(
                    question=UPSTREAM_SENTINEL_QUESTION, answer=e.message
                ),
            )

    async def generate_batch(
        self, note_id: str, count: int, *, user_id: Optional[int] = None
    ) -> GeneratedBatch:
        if not note_id:
            raise ValidationError("Note ID is required")
        if not MIN_CARD_COUNT <= count <= MAX_CARD_COUNT:
            raise ValidationError(
                f"count must be between {MIN_CARD_COUNT} and {MAX_CARD_COUNT}"
            )

        # Checked before any upstream call
        content = await self._load_content(note_id)

        result = await self._generate(content, count)
        if result.degraded and not self.persist_degraded:
            raise UpstreamError(
                f"AI service failed: {result.sentinel.answer}", kind="output"
            )

        batch_id = self._new_id()
        log = bind_context(logger, batch_id=batch_id)
        now = self._now()
        rows = [
            Flashcard(
                id=self._new_id(),
                question=pair.question,
                answer=pair.answer,
                note_id=note_id,
                user_id=user_id,
                batch_id=batch_id,
                created_at=now,
                updated_at=now,
            )
            for pair in result.flashcards
        ]

        stored = await self.storage.insert_flashcards(rows)
        log.info(f"Stored {len(stored)} flashcards for note {note_id}")
        if result.degraded:
            log.warning(f"Batch is degraded: {result.reason}")
        return GeneratedBatch(batch_id=batch_id, flashcards=stored, degraded=result.degraded)


def group_into_batches(cards: Sequence[Flashcard]) -> list[FlashcardBatch]:
    """Group cards by batch id, newest batch first.

    A batch takes its note and timestamp from the first card seen, so pass the
    cards ordered newest first.
    """
    batches: dict[str, FlashcardBatch] = {}
    for card in cards:
        batch = batches.get(card.batch_id)
        if batch is None:
            note = card.note
            batch = FlashcardBatch(
                batch_id=card.batch_id,
                note_id=card.note_id,
                note_title=note.title if note is not None else UNKNOWN_NOTE_TITLE,
                created_at=card.created_at or utc_now_iso(),
            )
            batches[card.batch_id] = batch
        batch.cards.append(card)

    return sorted(batches.values(), key=lambda b: b.created_at, reverse=True)
