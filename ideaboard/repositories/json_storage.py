"""
JSON-file persistence adapter.

Two documents live in the data directory: ``ideas.json`` (a bare list of idea
records) and ``labels.json`` (a bare list of names). Both are rewritten in full
on every mutation. Reads are best-effort: a missing, corrupt or wrongly shaped
document yields ``[]`` for ideas and ``DEFAULT_LABELS`` for labels.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from ideaboard.domain.ideas import (
    DEFAULT_LABELS,
    Idea,
    IdeaPatch,
    normalize_labels,
    sort_labels,
    utcnow,
)
from ideaboard.repositories.base import IdeaStore

logger = logging.getLogger(__name__)

IDEAS_FILE = "ideas.json"
LABELS_FILE = "labels.json"


def load(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def save(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def _as_stored(idea: Idea) -> Idea:
    """The idea as a later read will return it."""
    return Idea.from_record(idea.to_record())


class JsonIdeaStore(IdeaStore):
    """Ideas and labels kept as two JSON documents under ``data_dir``.

    Reads and writes within one process are serialized; separate processes
    writing the same directory still race and the last writer wins.
    """

    def __init__(self, data_dir: Path | str, *, create: bool = True) -> None:
        self.data_dir = Path(data_dir)
        self.ideas_file = self.data_dir / IDEAS_FILE
        self.labels_file = self.data_dir / LABELS_FILE
        self._lock = threading.Lock()
        if create:
            self._ensure_documents()

    def _ensure_documents(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.ideas_file.exists():
            save(self.ideas_file, [])
        if not self.labels_file.exists():
            save(self.labels_file, list(DEFAULT_LABELS))

    # -------------------------- documents --------------------------
    def _read_ideas(self) -> list[Idea]:
        try:
            data = load(self.ideas_file)
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable ideas document %s, using []: %s", self.ideas_file, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ideas document %s is not a list, using []", self.ideas_file)
            return []
        return [Idea.from_record(item) for item in data if isinstance(item, dict)]

    def _write_ideas(self, ideas: list[Idea]) -> None:
        save(self.ideas_file, [idea.to_record() for idea in ideas])

    def _read_labels(self) -> list[str]:
        try:
            data = load(self.labels_file)
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable labels document %s, using defaults: %s", self.labels_file, exc)
            return list(DEFAULT_LABELS)
        if not isinstance(data, list):
            logger.warning("Labels document %s is not a list, using defaults", self.labels_file)
            return list(DEFAULT_LABELS)
        return normalize_labels(data)

    def _write_labels(self, labels: list[str]) -> None:
        save(self.labels_file, labels)

    # -------------------------- ideas --------------------------
    def list_ideas(self) -> list[Idea]:
        with self._lock:
            ideas = self._read_ideas()
        ideas.sort(key=lambda idea: idea.updated_at, reverse=True)
        return ideas

    def get_idea(self, idea_id: str) -> Idea | None:
        with self._lock:
            ideas = self._read_ideas()
        for idea in ideas:
            if idea.id == idea_id:
                return idea
        return None

    def create_idea(self, idea: Idea) -> Idea:
        with self._lock:
            ideas = self._read_ideas()
            ideas.insert(0, idea)
            self._write_ideas(ideas)
        logger.info("Created idea %s", idea.id)
        return _as_stored(idea)

    def update_idea(self, idea_id: str, patch: IdeaPatch) -> Idea | None:
        with self._lock:
            ideas = self._read_ideas()
            for i, existing in enumerate(ideas):
                if existing.id == idea_id:
                    ideas[i] = patch.apply(existing, utcnow())
                    self._write_ideas(ideas)
                    logger.info("Updated idea %s", idea_id)
                    return _as_stored(ideas[i])
        return None

    def delete_idea(self, idea_id: str) -> bool:
        with self._lock:
            ideas = self._read_ideas()
            remaining = [idea for idea in ideas if idea.id != idea_id]
            if len(remaining) == len(ideas):
                return False
            self._write_ideas(remaining)
        logger.info("Deleted idea %s", idea_id)
        return True

    # -------------------------- labels --------------------------
    def list_labels(self) -> list[str]:
        with self._lock:
            return sort_labels(self._read_labels())

    def add_label(self, name: str) -> list[str]:
        with self._lock:
            labels = self._read_labels()
            if name not in labels:
                labels.append(name)
                self._write_labels(labels)
                logger.info("Added label %r", name)
            return sort_labels(labels)

    def remove_label(self, name: str) -> list[str]:
        with self._lock:
            labels = self._read_labels()
            remaining = [label for label in labels if label != name]
            self._write_labels(remaining)

            ideas = self._read_ideas()
            now = utcnow()
            cleared = 0
            for i, idea in enumerate(ideas):
                if idea.label == name:
                    ideas[i] = IdeaPatch(label="").apply(idea, now)
                    cleared += 1
            if cleared:
                self._write_ideas(ideas)
        logger.info("Removed label %r, cleared it from %d idea(s)", name, cleared)
        return sort_labels(remaining)
