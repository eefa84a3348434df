"""Tag group model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin


class TagGroup(Base, CreatedAtMixin):
    """Named partition of the tag namespace (e.g. "topics" vs "regions")."""

    __tablename__ = "tag_groups"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(125), nullable=False)
    slug: Mapped[str] = mapped_column(String(125), unique=True, nullable=False)

    # Слабая обратная ссылка: группа не владеет тегами
    tags: Mapped[list["Tag"]] = relationship("Tag", back_populates="group")

    def __repr__(self) -> str:
        return f"<TagGroup(id={self.id}, slug='{self.slug}')>"
