"""Tag model."""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin


class Tag(Base, CreatedAtMixin):
    """
    Тег - общая запись реестра, разделяемая всеми сущностями с этим slug.

    count - денормализованный счётчик живых строк Tagged, ссылающихся на тег.
    Обновляется инкрементально в той же транзакции, что и вставка/удаление Tagged.
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("count >= 0", name="ck_tags_count_non_negative"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(125), nullable=False)
    slug: Mapped[str] = mapped_column(String(125), unique=True, nullable=False)
    count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    suggest: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tag_group_id: Mapped[int | None] = mapped_column(
        ForeignKey("tag_groups.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    group: Mapped[Optional["TagGroup"]] = relationship(
        "TagGroup", back_populates="tags", lazy="selectin"
    )
    translations: Mapped[list["TagTranslation"]] = relationship(
        "TagTranslation", back_populates="tag", cascade="all, delete-orphan", lazy="selectin"
    )
    tagged: Mapped[list["Tagged"]] = relationship(
        "Tagged", back_populates="tag", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, slug='{self.slug}', count={self.count})>"
