from __future__ import annotations

from typing import TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import Base, utc_now_iso

if TYPE_CHECKING:
    from .notes import Note
    from .flashcards import Flashcard


class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now_iso)

    # Relationships
    notes: Mapped[list["Note"]] = relationship("Note", back_populates="user")
    flashcards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard", back_populates="user"
    )


__all__ = ["User"]
