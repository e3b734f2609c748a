from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator, model_validator

from app.apis.flashcards.schemas import CamelModel


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Content is required")
    return value


class NoteCreate(CamelModel):
    title: Optional[str] = None
    content: str = Field(..., description="Note body")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _require_text(value)


class NoteUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "NoteUpdate":
        if self.title is None and self.content is None:
            raise ValueError(
                "Request body must contain at least a title or content field to update."
            )
        return self


class NoteRead(CamelModel):
    id: str
    title: str
    content: str
    user_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class NoteSummary(NoteRead):
    preview: str = ""


class NoteResponse(CamelModel):
    note: NoteRead


class NoteListResponse(CamelModel):
    notes: list[NoteSummary] = Field(default_factory=list)


class NoteUpdateResponse(CamelModel):
    id: str
    title: str
    updated_at: str


class NoteDeleteResponse(CamelModel):
    success: bool = True
    deleted_flashcards: int = 0
