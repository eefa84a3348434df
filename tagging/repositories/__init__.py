"""Repository layer for data access."""

from .base import BaseRepository
from .entity import EntityRepository
from .tag import TagRepository
from .tag_group import TagGroupRepository
from .tagged import TaggedRepository

__all__ = [
    "BaseRepository",
    "EntityRepository",
    "TagRepository",
    "TagGroupRepository",
    "TaggedRepository",
]
