"""
Database package - declarative base and mixins
"""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow

__all__ = ["Base", "TimestampMixin", "UUIDPrimaryKeyMixin", "utcnow"]
