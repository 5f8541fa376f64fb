"""Backend-agnostic entry point for idea and label operations."""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Any, Mapping

from ideaboard.core.config import Settings, get_settings
from ideaboard.domain.ideas import Idea, IdeaCreate, IdeaPatch, utcnow
from ideaboard.repositories.base import IdeaStore

logger = logging.getLogger(__name__)


class IdeaRepository:
    """Entity-level operations over whichever store was configured.

    Callers never need to know which backend is active.
    """

    def __init__(self, store: IdeaStore) -> None:
        self.store = store

    # -------------------------- ideas --------------------------
    def list_ideas(self) -> list[Idea]:
        return self.store.list_ideas()

    def get_idea(self, idea_id: str) -> Idea | None:
        return self.store.get_idea(idea_id)

    def create_idea(self, payload: IdeaCreate | Mapping[str, Any]) -> Idea:
        if not isinstance(payload, IdeaCreate):
            payload = IdeaCreate.from_payload(payload)
        if not payload.title.strip():
            raise ValueError("title is required")
        idea = payload.build(str(uuid.uuid4()), utcnow())
        return self.store.create_idea(idea)

    def update_idea(self, idea_id: str, patch: IdeaPatch | Mapping[str, Any]) -> Idea | None:
        if not isinstance(patch, IdeaPatch):
            patch = IdeaPatch.from_payload(patch)
        return self.store.update_idea(idea_id, patch)

    def delete_idea(self, idea_id: str) -> bool:
        return self.store.delete_idea(idea_id)

    # -------------------------- labels --------------------------
    def list_labels(self) -> list[str]:
        return self.store.list_labels()

    def add_label(self, name: str) -> list[str]:
        name = (name or "").strip()
        if not name:
            return self.store.list_labels()
        return self.store.add_label(name)

    def remove_label(self, name: str) -> list[str]:
        name = (name or "").strip()
        if not name:
            return self.store.list_labels()
        return self.store.remove_label(name)


def build_store(settings: Settings) -> IdeaStore:
    if settings.storage_backend == "sql":
        from ideaboard.repositories.sql_repository import SQLIdeaStore

        return SQLIdeaStore()
    from ideaboard.repositories.json_storage import JsonIdeaStore

    return JsonIdeaStore(settings.data_dir)


@lru_cache
def get_repository() -> IdeaRepository:
    """Process-wide repository; the backend is chosen once, here."""
    settings = get_settings()
    store = build_store(settings)
    logger.info("Using %s storage backend", settings.storage_backend)
    return IdeaRepository(store)
