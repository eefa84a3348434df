"""SQLAlchemy models for the tagging service."""

from .base import Base, CreatedAtMixin, TimestampMixin
from .note import Note
from .post import Post
from .tag import Tag
from .tag_group import TagGroup
from .tag_translation import TagTranslation
from .taggable import HasTags, taggable_type_of
from .tagged import Tagged

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "Tag",
    "TagGroup",
    "TagTranslation",
    "Tagged",
    "HasTags",
    "taggable_type_of",
    "Post",
    "Note",
]
