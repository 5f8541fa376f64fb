"""Utility script to create the database schema and seed the default labels."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ideaboard.domain.ideas import DEFAULT_LABELS

from .session import Base, get_engine, get_session
from . import models  # noqa: F401  # ensure models are imported for metadata


def seed_default_labels() -> None:
    with get_session() as session:
        existing = set(session.execute(select(models.LabelRow.name)).scalars().all())
        for name in DEFAULT_LABELS:
            if name not in existing:
                session.add(models.LabelRow(name=name))
        session.commit()


def create_all() -> None:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    seed_default_labels()


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
