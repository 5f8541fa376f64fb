"""Relational persistence adapter backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ideaboard.db.models import IdeaRow, LabelRow
from ideaboard.db.session import get_session
from ideaboard.domain.ideas import Idea, IdeaPatch, utcnow
from ideaboard.repositories.base import IdeaStore, LabelCascadeError

logger = logging.getLogger(__name__)

# column name -> record key
COLUMN_KEYS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "status": "status",
    "label": "label",
    "tags": "tags",
    "attachments": "attachments",
    "ai_chat": "chatTranscript",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def record_to_storage(idea: Idea) -> dict[str, Any]:
    """Column values for a full ``ideas`` row."""
    return {
        "id": idea.id,
        "title": idea.title,
        "description": idea.description,
        "status": idea.status,
        "label": idea.label,
        "tags": list(idea.tags),
        "attachments": list(idea.attachments),
        "ai_chat": [dict(entry) for entry in idea.chat_transcript],
        "created_at": idea.created_at,
        "updated_at": idea.updated_at,
    }


def storage_to_record(row: IdeaRow) -> Idea:
    """Map a row back to an ``Idea``, applying the same defaults as JSON reads."""
    raw = {key: getattr(row, column) for column, key in COLUMN_KEYS.items()}
    return Idea.from_record(raw)


class SQLIdeaStore(IdeaStore):
    """Ideas and labels in the ``ideas``/``labels`` tables.

    Updates merge in this process (read, merge, write the whole row), and the
    label cascade issues one update per idea without a surrounding
    transaction. Database errors propagate unchanged; nothing is retried.
    """

    # -------------------------- ideas --------------------------
    def list_ideas(self) -> list[Idea]:
        with get_session() as session:
            stmt = select(IdeaRow).order_by(IdeaRow.updated_at.desc())
            return [storage_to_record(row) for row in session.execute(stmt).scalars().all()]

    def get_idea(self, idea_id: str) -> Idea | None:
        with get_session() as session:
            row = session.get(IdeaRow, idea_id)
            return storage_to_record(row) if row else None

    def create_idea(self, idea: Idea) -> Idea:
        entity = IdeaRow(**record_to_storage(idea))
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            created = storage_to_record(entity)
        logger.info("Created idea %s", created.id)
        return created

    def update_idea(self, idea_id: str, patch: IdeaPatch) -> Idea | None:
        with get_session() as session:
            row = session.get(IdeaRow, idea_id)
            if not row:
                return None
            merged = patch.apply(storage_to_record(row), utcnow())
            for column, value in record_to_storage(merged).items():
                setattr(row, column, value)
            session.commit()
            session.refresh(row)
            updated = storage_to_record(row)
        logger.info("Updated idea %s", idea_id)
        return updated

    def delete_idea(self, idea_id: str) -> bool:
        with get_session() as session:
            result = session.execute(delete(IdeaRow).where(IdeaRow.id == idea_id))
            session.commit()
        if result.rowcount:
            logger.info("Deleted idea %s", idea_id)
        return bool(result.rowcount)

    # -------------------------- labels --------------------------
    def list_labels(self) -> list[str]:
        with get_session() as session:
            stmt = select(LabelRow.name).order_by(LabelRow.name)
            return list(session.execute(stmt).scalars().all())

    def add_label(self, name: str) -> list[str]:
        with get_session() as session:
            if not session.get(LabelRow, name):
                session.add(LabelRow(name=name))
                try:
                    session.commit()
                    logger.info("Added label %r", name)
                except IntegrityError:
                    # inserted concurrently by someone else
                    session.rollback()
        return self.list_labels()

    def remove_label(self, name: str) -> list[str]:
        with get_session() as session:
            session.execute(delete(LabelRow).where(LabelRow.name == name))
            session.commit()
            stmt = select(IdeaRow.id).where(IdeaRow.label == name)
            impacted = list(session.execute(stmt).scalars().all())

        cleared: list[str] = []
        vanished: list[str] = []
        for position, idea_id in enumerate(impacted):
            try:
                updated = self.update_idea(idea_id, IdeaPatch(label=""))
            except SQLAlchemyError as exc:
                pending = impacted[position:]
                logger.error(
                    "Clearing label %r stopped after %d of %d idea(s): %s",
                    name, position, len(impacted), exc,
                )
                raise LabelCascadeError(name, cleared, pending, vanished) from exc
            if updated is None:
                # deleted since the snapshot, nothing to clear
                vanished.append(idea_id)
            else:
                cleared.append(idea_id)
        logger.info("Removed label %r, cleared it from %d idea(s)", name, len(cleared))
        return self.list_labels()
