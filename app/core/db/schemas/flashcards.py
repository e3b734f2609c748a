from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import Base, utc_now_iso

if TYPE_CHECKING:
    from .auth import User
    from .notes import Note


class Flashcard(Base):
    __tablename__ = "flashcards"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    note_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("notes.id"), nullable=True, index=True
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    # Groups the cards produced by one generation call
    batch_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    created_at: Mapped[str] = mapped_column(
        String(32), default=utc_now_iso, index=True
    )
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    note: Mapped[Optional["Note"]] = relationship("Note", back_populates="flashcards")
    user: Mapped[Optional["User"]] = relationship("User", back_populates="flashcards")


__all__ = ["Flashcard"]
