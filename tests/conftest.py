from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote ideaboard seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ideaboard.core import config as core_config  # noqa: E402
from ideaboard.db import models  # noqa: E402
from ideaboard.db import session as db_session  # noqa: E402
from ideaboard.db.create_tables import create_all  # noqa: E402
from ideaboard.repositories import repository as repo_module  # noqa: E402
from ideaboard.repositories.json_storage import JsonIdeaStore  # noqa: E402
from ideaboard.repositories.repository import IdeaRepository  # noqa: E402
from ideaboard.repositories.sql_repository import SQLIdeaStore  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.reset_engine()
    repo_module.get_repository.cache_clear()


@pytest.fixture()
def clean_env(tmp_path, monkeypatch):
    """Isola variáveis de ambiente e caches entre testes."""
    for var in ("DATABASE_URL", "IDEAS_DATA_DIR", "APP_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PUBLIC_DIR", str(tmp_path / "no-public"))
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch, clean_env):
    """Configura um SQLite temporário com as tabelas criadas e labels padrão."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    create_all()

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    engine.dispose()


@pytest.fixture()
def json_store(tmp_path, clean_env):
    return JsonIdeaStore(tmp_path / "data")


@pytest.fixture()
def sql_store(temp_db):
    return SQLIdeaStore()


@pytest.fixture(params=["json", "sql"])
def repo(request) -> IdeaRepository:
    """The same repository contract over each backend."""
    store = request.getfixturevalue(f"{request.param}_store")
    return IdeaRepository(store)
