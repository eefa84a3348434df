"""Tagging service: tags, tag groups and tag filters for any SQLAlchemy entity."""

__version__ = "1.0.0"
