"""Tagged join model (entity <-> tag)."""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin


class Tagged(Base, CreatedAtMixin):
    """
    Связь "сущность - тег".

    Полиморфная ссылка на сущность: (taggable_type, taggable_id).
    tag_slug дублирует Tag.slug, чтобы фильтры по тегам не делали JOIN с tags.

    Инвариант: не больше одной строки на пару (сущность, тег) -
    обеспечивается уникальным индексом на уровне БД.
    """

    __tablename__ = "tagged"
    __table_args__ = (
        UniqueConstraint("taggable_type", "taggable_id", "tag_id", name="uq_tagged_entity_tag"),
        Index("ix_tagged_type_slug", "taggable_type", "tag_slug"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    taggable_type: Mapped[str] = mapped_column(String(125), nullable=False)
    taggable_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"), nullable=False)
    tag_slug: Mapped[str] = mapped_column(String(125), nullable=False)
    sorting: Mapped[int | None] = mapped_column(Integer, nullable=True)

    tag: Mapped["Tag"] = relationship("Tag", back_populates="tagged", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<Tagged({self.taggable_type}#{self.taggable_id} -> tag_id={self.tag_id}, "
            f"sorting={self.sorting})>"
        )
