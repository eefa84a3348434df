"""Tag translation model."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class TagTranslation(Base):
    """Localized name/slug of a tag, one row per (tag, locale)."""

    __tablename__ = "tag_translations"
    __table_args__ = (UniqueConstraint("tag_id", "locale", name="uq_tag_translations_tag_locale"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(125), nullable=False)
    slug: Mapped[str] = mapped_column(String(125), nullable=False, index=True)

    tag: Mapped["Tag"] = relationship("Tag", back_populates="translations")

    def __repr__(self) -> str:
        return f"<TagTranslation(tag_id={self.tag_id}, locale='{self.locale}', slug='{self.slug}')>"
