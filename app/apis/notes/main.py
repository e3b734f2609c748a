from __future__ import annotations

from fastapi import APIRouter, status

from app.apis.deps import CurrentUserId, Session
from app.core.db_services import NoteService
from app.core.utils import truncate_content
from .schemas import (
    NoteCreate,
    NoteDeleteResponse,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteSummary,
    NoteUpdate,
    NoteUpdateResponse,
)


router = APIRouter()


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["notes"],
)
async def create_note(
    body: NoteCreate, session: Session, user_id: CurrentUserId
) -> NoteResponse:
    note = await NoteService(session).create_note(
        content=body.content, title=body.title, user_id=user_id
    )
    return NoteResponse(note=NoteRead.model_validate(note))


@router.get("/notes", response_model=NoteListResponse, tags=["notes"])
async def list_notes(session: Session) -> NoteListResponse:
    notes = await NoteService(session).list_notes()
    return NoteListResponse(
        notes=[
            NoteSummary(
                **NoteRead.model_validate(n).model_dump(),
                preview=truncate_content(n.content),
            )
            for n in notes
        ]
    )


@router.get("/notes/{note_id}", response_model=NoteResponse, tags=["notes"])
async def get_note(note_id: str, session: Session) -> NoteResponse:
    note = await NoteService(session).get_note(note_id)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.patch("/notes/{note_id}", response_model=NoteUpdateResponse, tags=["notes"])
async def update_note(
    note_id: str, body: NoteUpdate, session: Session
) -> NoteUpdateResponse:
    note = await NoteService(session).update_note(
        note_id, title=body.title, content=body.content
    )
    return NoteUpdateResponse(id=note.id, title=note.title, updated_at=note.updated_at)


@router.delete("/notes/{note_id}", response_model=NoteDeleteResponse, tags=["notes"])
async def delete_note(
    note_id: str, session: Session, cascade: bool = False
) -> NoteDeleteResponse:
    removed = await NoteService(session).delete_note(note_id, cascade=cascade)
    return NoteDeleteResponse(deleted_flashcards=removed)
