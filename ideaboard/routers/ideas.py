from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Request

from ideaboard.domain.ideas import Idea, IdeaCreate, IdeaPatch
from ideaboard.routers import get_repo
from ideaboard.services.chat_service import ChatService
from ideaboard.services.research import build_research_brief

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


def _found(idea: Optional[Idea]) -> Idea:
    if not idea:
        raise HTTPException(404, "not found")
    return idea


@router.get("")
def list_ideas(request: Request):
    return [idea.to_record() for idea in get_repo(request).list_ideas()]


@router.post("", status_code=201)
def create_idea(request: Request, payload: Optional[dict[str, Any]] = Body(default=None)):
    data = IdeaCreate.from_payload(payload or {})
    if not data.title:
        raise HTTPException(400, "title is required")
    return get_repo(request).create_idea(data).to_record()


@router.get("/{idea_id}")
def get_idea(idea_id: str, request: Request):
    return _found(get_repo(request).get_idea(idea_id)).to_record()


@router.put("/{idea_id}")
def update_idea(idea_id: str, request: Request, payload: Optional[dict[str, Any]] = Body(default=None)):
    patch = IdeaPatch.from_payload(payload or {})
    return _found(get_repo(request).update_idea(idea_id, patch)).to_record()


@router.delete("/{idea_id}")
def delete_idea(idea_id: str, request: Request):
    if not get_repo(request).delete_idea(idea_id):
        raise HTTPException(404, "not found")
    return {"ok": True}


@router.post("/{idea_id}/research")
def research(idea_id: str, request: Request):
    idea = _found(get_repo(request).get_idea(idea_id))
    return {"research": build_research_brief(idea)}


@router.post("/{idea_id}/ai-chat")
def ai_chat(idea_id: str, request: Request, payload: Optional[dict[str, Any]] = Body(default=None)):
    message = str((payload or {}).get("message") or "")
    result = ChatService(get_repo(request)).ask(idea_id, message)
    if not result:
        raise HTTPException(404, "not found")
    return {"reply": result.reply, "chat": result.chat}
