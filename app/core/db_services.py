"""Database service classes for notes and generated flashcards."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.db.base import utc_now_iso
from app.core.db.schemas.auth import User
from app.core.db.schemas.flashcards import Flashcard
from app.core.db.schemas.notes import DEFAULT_NOTE_TITLE, Note
from app.core.errors import ConflictError, NotFoundError, PersistenceError
from app.core.logging import bind_context, get_logger

logger = get_logger(__name__)


class NoteService:
    """Service for creating, reading, updating and deleting notes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(
        self, *, content: str, title: Optional[str], user_id: Optional[int]
    ) -> Note:
        now = utc_now_iso()
        note = Note(
            id=str(uuid4()),
            title=(title or "").strip() or DEFAULT_NOTE_TITLE,
            content=content,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to create note: {e}")
            raise PersistenceError("Failed to create note") from e
        return note

    async def list_notes(self) -> Sequence[Note]:
        result = await self.session.execute(
            select(Note).order_by(Note.created_at.desc())
        )
        return result.scalars().all()

    async def get_note(self, note_id: str) -> Note:
        note = await self.session.get(Note, note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def update_note(
        self,
        note_id: str,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        note = await self.get_note(note_id)
        if title is not None:
            note.title = title.strip() or DEFAULT_NOTE_TITLE
        if content is not None:
            note.content = content
        note.updated_at = utc_now_iso()
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to update note {note_id}: {e}")
            raise PersistenceError("Failed to update note") from e
        return note

    async def delete_note(self, note_id: str, *, cascade: bool = False) -> int:
        """Delete a note; return how many of its flashcards went with it.

        Without ``cascade`` a note that still has flashcards is a conflict.
        With it, the flashcards and the note are removed in one transaction.
        """
        try:
            referencing = (
                await self.session.execute(
                    select(func.count(Flashcard.id)).where(Flashcard.note_id == note_id)
                )
            ).scalar() or 0

            if referencing and not cascade:
                raise ConflictError(
                    "Cannot delete this note because it has associated flashcards. "
                    "Please delete the flashcards first."
                )

            removed_cards = 0
            if cascade:
                result = await self.session.execute(
                    delete(Flashcard).where(Flashcard.note_id == note_id)
                )
                removed_cards = result.rowcount or 0

            result = await self.session.execute(delete(Note).where(Note.id == note_id))
            if not result.rowcount:
                raise NotFoundError("Note not found")

            await self.session.commit()
            return removed_cards
        except (ConflictError, NotFoundError):
            await self.session.rollback()
            raise
        except IntegrityError as e:
            # A flashcard was written for this note after the count above
            await self.session.rollback()
            logger.warning(f"Note {note_id} delete blocked by foreign key: {e}")
            raise ConflictError(
                "Cannot delete this note because it has associated flashcards. "
                "Please delete the flashcards first."
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete note {note_id}: {e}")
            raise PersistenceError("Failed to delete note") from e


class FlashcardGenerationService:
    """Storage for generated flashcards and the batches they form."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_note_by_id(self, note_id: str) -> Optional[Note]:
        """Load a note and end the read transaction.

        The pooled connection goes back before the caller awaits the
        completion API; `expire_on_commit=False` keeps the note readable.
        """
        note = await self.session.get(Note, note_id)
        await self.session.commit()
        return note

    async def insert_flashcards(self, rows: Sequence[Flashcard]) -> list[Flashcard]:
        """Insert every row or none of them."""
        self.session.add_all(rows)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Bulk insert of {len(rows)} flashcards failed: {e}")
            raise PersistenceError("Failed to save generated flashcards") from e
        return list(rows)

    async def list_flashcards_with_notes(self) -> Sequence[Flashcard]:
        result = await self.session.execute(
            select(Flashcard)
            .options(selectinload(Flashcard.note))
            .order_by(Flashcard.created_at.desc())
        )
        return result.scalars().all()

    async def get_batch(self, batch_id: str) -> Sequence[Flashcard]:
        result = await self.session.execute(
            select(Flashcard)
            .options(selectinload(Flashcard.note))
            .where(Flashcard.batch_id == batch_id)
            .order_by(Flashcard.created_at.desc())
        )
        return result.scalars().all()

    async def delete_flashcard(self, flashcard_id: str) -> None:
        try:
            result = await self.session.execute(
                delete(Flashcard).where(Flashcard.id == flashcard_id)
            )
            if not result.rowcount:
                raise NotFoundError("Flashcard not found")
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete flashcard {flashcard_id}: {e}")
            raise PersistenceError("Failed to delete flashcard") from e

    async def delete_flashcards_by_batch(self, batch_id: str) -> int:
        """Delete every card in a batch; an unknown batch deletes nothing."""
        try:
            result = await self.session.execute(
                delete(Flashcard).where(Flashcard.batch_id == batch_id)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete flashcard batch {batch_id}: {e}")
            raise PersistenceError("Failed to delete flashcard batch") from e

        count = result.rowcount or 0
        log = bind_context(logger, batch_id=batch_id)
        if count:
            log.info(f"Deleted {count} flashcards")
        else:
            log.info("No flashcards found for batch")
        return count


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_or_create(self, *, user_id: int, username: str) -> User:
        user = await self.session.get(User, user_id)
        if user is not None:
            return user
        user = User(id=user_id, username=username)
        self.session.add(user)
        await self.session.commit()
        return user
