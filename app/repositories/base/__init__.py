"""
Base repositories package.

Provides the base repository infrastructure shared by all domain
repositories.
"""

from app.repositories.base.base_repository import BaseRepository, ModelType

__all__ = [
    "BaseRepository",
    "ModelType",
]
