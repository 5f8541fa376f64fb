"""Template-based chat about a single idea."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ideaboard.domain.ideas import Idea, IdeaPatch, chat_entry, utcnow
from ideaboard.repositories.repository import IdeaRepository

EMPTY_MESSAGE_REPLY = "Give me a question about this idea and I will help you scope, validate, or plan it."


def generate_reply(idea: Idea, message: str | None) -> str:
    """Pick a canned answer by keyword. No model is involved."""
    msg = (message or "").strip()
    lower = msg.lower()
    if not msg:
        return EMPTY_MESSAGE_REPLY

    if "mvp" in lower or "first version" in lower:
        return (
            f'MVP plan for "{idea.title}":\n'
            "1) Single core workflow only\n"
            "2) Manual fallback for weak AI parts\n"
            "3) Capture user feedback + one quality metric\n"
            "4) Ship in 7 days, then iterate."
        )

    if "stack" in lower:
        return (
            "Suggested stack:\n"
            "- Frontend: current web UI\n"
            "- Backend: FastAPI HTTP API (already in place)\n"
            "- AI layer: prompt templates + selected model API\n"
            "- Storage: JSON now, upgrade to SQLite/Postgres when usage grows."
        )

    if "risk" in lower or "problem" in lower:
        return (
            "Top risks for this idea:\n"
            "- Vague user value\n"
            "- AI output reliability\n"
            "- Cost creep if model calls are frequent\n"
            "- Security/privacy if sensitive data involved\n"
            "Mitigation: define one user job and one metric before coding more."
        )

    return (
        f'Good question. For "{idea.title}", I\'d do this next: define target user, '
        "write a 5-step happy path, and test with 3 sample inputs before expanding scope."
    )


@dataclass
class ChatResult:
    reply: str
    chat: list[dict[str, Any]]


class ChatService:
    """Appends a question and its reply to an idea's transcript."""

    def __init__(self, repository: IdeaRepository) -> None:
        self.repository = repository

    def ask(self, idea_id: str, message: str | None) -> ChatResult | None:
        idea = self.repository.get_idea(idea_id)
        if not idea:
            return None
        text = (message or "").strip()
        reply = generate_reply(idea, text)
        now = utcnow()
        transcript = idea.chat_transcript + [
            chat_entry("user", text, now),
            chat_entry("assistant", reply, now),
        ]
        updated = self.repository.update_idea(idea_id, IdeaPatch(chat_transcript=transcript))
        if not updated:
            # deleted between read and write
            return None
        return ChatResult(reply=reply, chat=updated.chat_transcript)
