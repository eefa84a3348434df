"""Service layer with business logic."""

from .post import PostService
from .tag import TagService
from .tag_group import TagGroupService
from .tagging import EntityTags, TaggingService, TagUsage

__all__ = [
    "TaggingService",
    "EntityTags",
    "TagUsage",
    "TagService",
    "TagGroupService",
    "PostService",
]
