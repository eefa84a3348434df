"""Post model (sample taggable entity)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Post(Base, TimestampMixin):
    """Blog post. Implements the HasTags capability."""

    __tablename__ = "posts"
    __taggable_type__ = "post"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}')>"
