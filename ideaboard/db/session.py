"""Engine/session helpers for the SQL backend.

One engine per process, built lazily from ``DATABASE_URL``. ``reset_engine``
drops it so the next call picks up a changed environment.
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from ideaboard.core.config import get_settings

Base = declarative_base()


def engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # request handlers run in a threadpool
        options["connect_args"] = {"check_same_thread": False}
    return options


@lru_cache
def get_engine() -> Engine:
    url = get_settings().database_url
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return create_engine(url, **engine_options(url))


@lru_cache
def _get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, future=True)


def reset_engine() -> None:
    """Dispose the cached engine (if any) and forget it."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    _get_sessionmaker.cache_clear()
    get_engine.cache_clear()


@contextmanager
def get_session() -> Iterator[Session]:
    """A session that rolls back on error before the error propagates."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
