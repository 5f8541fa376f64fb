"""Domain types for ideas and labels, plus record normalization.

The serialized (record) form of an idea uses camelCase keys and ISO-8601
timestamps; it is what the JSON documents and the HTTP API carry. Every read
from storage goes through ``normalize_record`` so that callers always see the
canonical shape, whatever is on disk.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

DEFAULT_LABELS = ("Agent", "Automation", "Research")
DEFAULT_STATUS = "new"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

CHAT_ROLES = ("user", "assistant")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO string (or datetime) into an aware UTC datetime.

    Missing or unparsable values map to ``EPOCH`` so they sort last.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return EPOCH
    else:
        return EPOCH
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return parse_timestamp(value).isoformat()


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _clean(value: Any) -> str:
    return _text(value).strip()


def _sequence(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _tags(value: Any) -> list[str]:
    return [_text(tag) for tag in _sequence(value) if tag is not None]


def _chat(value: Any) -> list[dict[str, Any]]:
    return [dict(entry) for entry in _sequence(value) if isinstance(entry, Mapping)]


def normalize_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce a stored idea record into the canonical record shape.

    Missing ``label`` becomes ``""`` and missing ``status`` becomes ``"new"``
    (an explicitly empty status is kept); ``tags``, ``attachments`` and
    ``chatTranscript`` become lists (empty when absent or not a list). Older
    documents that stored the transcript under ``aiChat`` are still read.
    Normalizing an already-normalized record returns an equal record.
    """
    if "chatTranscript" in raw:
        chat = raw.get("chatTranscript")
    else:
        chat = raw.get("aiChat")
    return {
        "id": _text(raw.get("id")),
        "title": _text(raw.get("title")),
        "description": _text(raw.get("description")),
        "status": _text(raw.get("status"), DEFAULT_STATUS),
        "label": _text(raw.get("label")),
        "tags": _tags(raw.get("tags")),
        "attachments": _sequence(raw.get("attachments")),
        "chatTranscript": _chat(chat),
        "createdAt": format_timestamp(parse_timestamp(raw.get("createdAt"))),
        "updatedAt": format_timestamp(parse_timestamp(raw.get("updatedAt"))),
    }


def normalize_labels(raw: Iterable[Any]) -> list[str]:
    """Keep non-empty text names, stripped, first occurrence wins."""
    names: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name not in names:
            names.append(name)
    return names


def sort_labels(names: Iterable[str]) -> list[str]:
    """Canonical label order shared by every backend: by name."""
    return sorted(names)


def chat_entry(role: str, text: str, at: datetime) -> dict[str, Any]:
    if role not in CHAT_ROLES:
        raise ValueError(f"unknown chat role: {role!r}")
    return {"role": role, "text": text, "timestamp": format_timestamp(at)}


@dataclass
class Idea:
    id: str
    title: str
    description: str = ""
    status: str = DEFAULT_STATUS
    label: str = ""
    tags: list[str] = field(default_factory=list)
    attachments: list[Any] = field(default_factory=list)
    chat_transcript: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Idea:
        record = normalize_record(raw)
        return cls(
            id=record["id"],
            title=record["title"],
            description=record["description"],
            status=record["status"],
            label=record["label"],
            tags=record["tags"],
            attachments=record["attachments"],
            chat_transcript=record["chatTranscript"],
            created_at=parse_timestamp(record["createdAt"]),
            updated_at=parse_timestamp(record["updatedAt"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "label": self.label,
            "tags": list(self.tags),
            "attachments": list(self.attachments),
            "chatTranscript": [dict(entry) for entry in self.chat_transcript],
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }


@dataclass
class IdeaCreate:
    """Input for creating an idea. Only ``title`` is required."""

    title: str
    description: str = ""
    status: str = DEFAULT_STATUS
    label: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> IdeaCreate:
        return cls(
            title=_clean(payload.get("title")),
            description=_clean(payload.get("description")),
            status=_text(payload.get("status")) or DEFAULT_STATUS,
            label=_clean(payload.get("label")),
            tags=_tags(payload.get("tags")),
        )

    def build(self, idea_id: str, now: datetime) -> Idea:
        # attachments and transcript always start empty
        return Idea(
            id=idea_id,
            title=self.title.strip(),
            description=self.description.strip(),
            status=self.status or DEFAULT_STATUS,
            label=self.label.strip(),
            tags=list(self.tags),
            created_at=now,
            updated_at=now,
        )


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET

# patch field -> record key
_PATCH_KEYS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "label": "label",
    "tags": "tags",
    "attachments": "attachments",
    "chat_transcript": "chatTranscript",
}


@dataclass(frozen=True)
class IdeaPatch:
    """Partial update: every field is either a new value or ``UNSET``.

    ``UNSET`` fields are left untouched by ``apply``; there is no way to clear
    a field by omitting it.
    """

    title: str | _Unset = UNSET
    description: str | _Unset = UNSET
    status: str | _Unset = UNSET
    label: str | _Unset = UNSET
    tags: list[str] | _Unset = UNSET
    attachments: list[Any] | _Unset = UNSET
    chat_transcript: list[dict[str, Any]] | _Unset = UNSET

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> IdeaPatch:
        """Build a patch from a JSON body; only keys present are set."""
        body = dict(payload)
        if "chatTranscript" not in body and "aiChat" in body:
            body["chatTranscript"] = body["aiChat"]
        values: dict[str, Any] = {}
        for name, key in _PATCH_KEYS.items():
            if key not in body:
                continue
            value = body[key]
            if name in ("title", "description", "label"):
                values[name] = _clean(value)
            elif name == "status":
                values[name] = _text(value)
            elif name == "tags":
                values[name] = _tags(value)
            elif name == "chat_transcript":
                values[name] = _chat(value)
            else:
                values[name] = _sequence(value)
        return cls(**values)

    def changes(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def apply(self, idea: Idea, now: datetime) -> Idea:
        """Merge the set fields over ``idea`` and refresh ``updated_at``."""
        return replace(idea, **self.changes(), updated_at=now)
