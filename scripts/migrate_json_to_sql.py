"""One-off migration script: JSON data directory (ideas.json, labels.json) -> SQL."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garantir que o pacote ideaboard seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ideaboard.core.config import get_settings
from ideaboard.db.session import Base, get_engine, get_session
from ideaboard.db.models import IdeaRow, LabelRow
from ideaboard.repositories.json_storage import JsonIdeaStore
from ideaboard.repositories.sql_repository import record_to_storage


def migrate(data_dir: Path) -> tuple[int, int]:
    """Copy labels and ideas, merging by primary key. Returns the counts."""
    # read only: a missing document must not be created in the source dir
    source = JsonIdeaStore(data_dir, create=False)
    labels = source.list_labels() if source.labels_file.exists() else []
    ideas = source.list_ideas()

    # no label seeding: the JSON label set is copied as is
    Base.metadata.create_all(bind=get_engine())
    with get_session() as session:
        for name in labels:
            session.merge(LabelRow(name=name))
        for idea in ideas:
            session.merge(IdeaRow(**record_to_storage(idea)))
        session.commit()
    return len(labels), len(ideas)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Copy the JSON data directory into DATABASE_URL.")
    parser.add_argument("--data-dir", type=Path, default=None, help="defaults to IDEAS_DATA_DIR")
    args = parser.parse_args(argv)
    settings = get_settings()
    if not settings.database_url:
        raise SystemExit("DATABASE_URL must be set to migrate.")
    data_dir = args.data_dir or settings.data_dir
    if not data_dir.exists():
        raise SystemExit(f"Data directory not found: {data_dir}")
    n_labels, n_ideas = migrate(data_dir)
    print(f"Migrated {n_labels} label(s) and {n_ideas} idea(s) from {data_dir}.")


if __name__ == "__main__":
    main()
