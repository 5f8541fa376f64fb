"""Storage contract shared by the JSON and SQL backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ideaboard.domain.ideas import Idea, IdeaPatch


class StorageError(Exception):
    """Base class for errors raised by a store."""


class LabelCascadeError(StorageError):
    """Raised when clearing a removed label from its ideas stopped part way.

    The label itself is already gone and ``cleared`` ideas were already
    written; ``pending`` ideas still reference the label. Nothing is rolled
    back. ``vanished`` ideas were deleted before they could be cleared. The
    original error is chained as ``__cause__``.
    """

    def __init__(
        self,
        label: str,
        cleared: list[str],
        pending: list[str],
        vanished: list[str] | None = None,
    ):
        super().__init__(
            f"label {label!r} removed but {len(pending)} idea(s) still reference it"
        )
        self.label = label
        self.cleared = cleared
        self.pending = pending
        self.vanished = vanished or []


class IdeaStore(ABC):
    """Backend for ideas and labels.

    Implementations: ``JsonIdeaStore`` (two JSON documents on disk) and
    ``SQLIdeaStore`` (two relational tables). Both return normalized ``Idea``
    objects and labels in name order.
    """

    @abstractmethod
    def list_ideas(self) -> list[Idea]:
        """All ideas, most recently updated first."""

    @abstractmethod
    def get_idea(self, idea_id: str) -> Idea | None:
        """The idea with ``idea_id``, or None."""

    @abstractmethod
    def create_idea(self, idea: Idea) -> Idea:
        """Persist a fully built idea and return it as stored."""

    @abstractmethod
    def update_idea(self, idea_id: str, patch: IdeaPatch) -> Idea | None:
        """Merge ``patch`` over the stored idea.

        Returns None if the idea does not exist.
        """

    @abstractmethod
    def delete_idea(self, idea_id: str) -> bool:
        """Returns True if the idea existed and was removed."""

    @abstractmethod
    def list_labels(self) -> list[str]:
        """All label names."""

    @abstractmethod
    def add_label(self, name: str) -> list[str]:
        """Add ``name`` unless present; returns the full label set."""

    @abstractmethod
    def remove_label(self, name: str) -> list[str]:
        """Remove ``name`` and clear it from every idea that references it.

        Removing an unknown name is not an error. Returns the label set.
        """
