"""SQLAlchemy models for the ``ideas`` and ``labels`` tables.

Column names follow the database convention (``ai_chat``, ``created_at``,
``updated_at``); ``repositories.sql_repository`` maps them to the record keys.
"""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, JSON, func

from .session import Base


class LabelRow(Base):
    __tablename__ = "labels"

    name = Column(Text, primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class IdeaRow(Base):
    __tablename__ = "ideas"

    id = Column(String(36), primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(Text, nullable=False, default="new")
    label = Column(Text, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    attachments = Column(JSON, nullable=False, default=list)
    ai_chat = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
