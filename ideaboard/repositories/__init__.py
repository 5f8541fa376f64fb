"""
Persistence adapters.

``JsonIdeaStore`` keeps ideas and labels in two JSON documents;
``SQLIdeaStore`` keeps them in two database tables. Services and routers go
through ``IdeaRepository`` and never touch a store directly.
"""

from ideaboard.repositories.base import IdeaStore, LabelCascadeError, StorageError
from ideaboard.repositories.repository import IdeaRepository, build_store, get_repository

__all__ = [
    "IdeaRepository",
    "IdeaStore",
    "LabelCascadeError",
    "StorageError",
    "build_store",
    "get_repository",
]
