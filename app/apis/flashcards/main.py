from __future__ import annotations

from fastapi import APIRouter, status

from app.apis.deps import Completion, CurrentUserId, PersistDegraded, Session
from app.core.db_services import FlashcardGenerationService
from app.core.errors import NotFoundError
from app.modules.flashcards.main import FlashcardBatchGenerator, group_into_batches
from .schemas import (
    BatchInfo,
    DeleteBatchResponse,
    FlashcardBatchDetailResponse,
    FlashcardBatchListResponse,
    FlashcardBatchRead,
    FlashcardRead,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    SuccessResponse,
)


router = APIRouter()


@router.post(
    "/flashcards",
    response_model=GenerateFlashcardsResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["flashcards"],
)
async def generate_flashcard_batch(
    req: GenerateFlashcardsRequest,
    session: Session,
    user_id: CurrentUserId,
    client: Completion,
    persist_degraded: PersistDegraded,
) -> GenerateFlashcardsResponse:
    generator = FlashcardBatchGenerator(
        FlashcardGenerationService(session),
        client,
        persist_degraded=persist_degraded,
    )
    batch = await generator.generate_batch(req.note_id, req.count, user_id=user_id)
    return GenerateFlashcardsResponse(
        batch_id=batch.batch_id,
        flashcards=[FlashcardRead.model_validate(c) for c in batch.flashcards],
        degraded=batch.degraded,
    )


@router.get(
    "/flashcards",
    response_model=FlashcardBatchListResponse,
    tags=["flashcards"],
)
async def list_flashcard_batches(session: Session) -> FlashcardBatchListResponse:
    cards = await FlashcardGenerationService(session).list_flashcards_with_notes()
    return FlashcardBatchListResponse(
        batches=[
            FlashcardBatchRead(
                batch_id=b.batch_id,
                note_id=b.note_id,
                note_title=b.note_title,
                created_at=b.created_at,
                cards=[FlashcardRead.model_validate(c) for c in b.cards],
            )
            for b in group_into_batches(cards)
        ]
    )


@router.get(
    "/flashcards/batch/{batch_id}",
    response_model=FlashcardBatchDetailResponse,
    tags=["flashcards"],
)
async def get_flashcard_batch(
    batch_id: str, session: Session
) -> FlashcardBatchDetailResponse:
    cards = await FlashcardGenerationService(session).get_batch(batch_id)
    batches = group_into_batches(cards)
    if not batches:
        raise NotFoundError("Flashcard batch not found")
    b = batches[0]
    return FlashcardBatchDetailResponse(
        batch=BatchInfo(
            batch_id=b.batch_id,
            note_id=b.note_id,
            note_title=b.note_title,
            created_at=b.created_at,
        ),
        cards=[FlashcardRead.model_validate(c) for c in b.cards],
    )


@router.delete(
    "/flashcards/batch/{batch_id}",
    response_model=DeleteBatchResponse,
    tags=["flashcards"],
)
async def delete_flashcard_batch(batch_id: str, session: Session) -> DeleteBatchResponse:
    count = await FlashcardGenerationService(session).delete_flashcards_by_batch(batch_id)
    return DeleteBatchResponse(
        count=count,
        message=f"Successfully processed deletion for batch {batch_id}. Deleted count: {count}",
    )


@router.delete(
    "/flashcards/{flashcard_id}",
    response_model=SuccessResponse,
    tags=["flashcards"],
)
async def delete_flashcard(flashcard_id: str, session: Session) -> SuccessResponse:
    await FlashcardGenerationService(session).delete_flashcard(flashcard_id)
    return SuccessResponse()
