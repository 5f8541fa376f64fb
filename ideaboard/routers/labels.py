from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Request

from ideaboard.routers import get_repo

router = APIRouter(prefix="/api/labels", tags=["labels"])


@router.get("")
def list_labels(request: Request):
    return get_repo(request).list_labels()


@router.post("", status_code=201)
def add_label(request: Request, payload: Optional[dict[str, Any]] = Body(default=None)):
    name = str((payload or {}).get("name") or "").strip()
    if not name:
        raise HTTPException(400, "label name is required")
    return get_repo(request).add_label(name)


@router.delete("/{name}")
def remove_label(name: str, request: Request):
    # also clears the label from every idea using it
    return get_repo(request).remove_label(name)
