"""Domain types shared by repositories, services and routers."""

from .ideas import (
    DEFAULT_LABELS,
    UNSET,
    Idea,
    IdeaCreate,
    IdeaPatch,
    normalize_record,
)

__all__ = [
    "DEFAULT_LABELS",
    "UNSET",
    "Idea",
    "IdeaCreate",
    "IdeaPatch",
    "normalize_record",
]
