from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import Base, utc_now_iso

if TYPE_CHECKING:
    from .auth import User
    from .flashcards import Flashcard


DEFAULT_NOTE_TITLE = "Untitled Note"


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, default=DEFAULT_NOTE_TITLE)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[str] = mapped_column(
        String(32), default=utc_now_iso, index=True
    )
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    user: Mapped[Optional["User"]] = relationship("User", back_populates="notes")
    # Deletes go through the database so a referencing flashcard blocks them
    flashcards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard", back_populates="note", passive_deletes="all"
    )


__all__ = ["DEFAULT_NOTE_TITLE", "Note"]
