"""
FastAPI routers grouped by resource (ideas, labels).

Each module exposes an APIRouter included by ``ideaboard.app``. Routers only
translate HTTP to repository/service calls and back.
"""

from __future__ import annotations

from fastapi import Request

from ideaboard.repositories.repository import IdeaRepository, get_repository


def get_repo(request: Request) -> IdeaRepository:
    repo = getattr(getattr(request.app, "state", None), "repository", None)
    return repo or get_repository()
