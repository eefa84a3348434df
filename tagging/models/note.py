"""Note model (second taggable entity type)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Note(Base, TimestampMixin):
    """Short private note. Tags stay when a note is deleted."""

    __tablename__ = "notes"
    __taggable_type__ = "note"
    __untag_on_delete__ = False

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"
