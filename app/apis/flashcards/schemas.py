from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.flashcards.prompts import (
    DEFAULT_CARD_COUNT,
    MAX_CARD_COUNT,
    MIN_CARD_COUNT,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class GenerateFlashcardsRequest(CamelModel):
    note_id: str = Field(..., min_length=1, description="Note to generate cards from")
    count: int = Field(
        default=DEFAULT_CARD_COUNT,
        strict=True,
        ge=MIN_CARD_COUNT,
        le=MAX_CARD_COUNT,
        description="Number of flashcards to ask for",
    )


class FlashcardRead(CamelModel):
    id: str
    question: str
    answer: str
    note_id: Optional[str] = None
    user_id: Optional[int] = None
    batch_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class GenerateFlashcardsResponse(CamelModel):
    batch_id: str
    flashcards: list[FlashcardRead] = Field(default_factory=list)
    degraded: bool = False


class BatchInfo(CamelModel):
    batch_id: str
    note_id: Optional[str] = None
    note_title: Optional[str] = None
    created_at: str


class FlashcardBatchRead(BatchInfo):
    cards: list[FlashcardRead] = Field(default_factory=list)


class FlashcardBatchListResponse(CamelModel):
    batches: list[FlashcardBatchRead] = Field(default_factory=list)


class FlashcardBatchDetailResponse(CamelModel):
    batch: BatchInfo
    cards: list[FlashcardRead] = Field(default_factory=list)


class DeleteBatchResponse(CamelModel):
    count: int
    message: str


class SuccessResponse(CamelModel):
    success: bool = True
