"""Core application components."""

from .config import Settings, TaggingConfig, settings
from .database import AsyncSessionLocal, drop_db, engine, init_db
from .exceptions import AlreadyExistsError, NotFoundError, TaggingError, ValidationError

__all__ = [
    "settings",
    "Settings",
    "TaggingConfig",
    "engine",
    "AsyncSessionLocal",
    "init_db",
    "drop_db",
    "TaggingError",
    "ValidationError",
    "NotFoundError",
    "AlreadyExistsError",
]
