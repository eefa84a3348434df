"""API layer - FastAPI endpoints."""

from .posts import router as posts_router
from .tag_groups import router as tag_groups_router
from .tags import router as tags_router

__all__ = [
    "posts_router",
    "tags_router",
    "tag_groups_router",
]
