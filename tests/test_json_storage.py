"""
Tests for the JSON-file store: document setup, best-effort reads and the
on-disk shape.
"""
from __future__ import annotations

import json
import threading

from ideaboard.domain.ideas import DEFAULT_LABELS, IdeaCreate
from ideaboard.repositories.json_storage import JsonIdeaStore
from ideaboard.repositories.repository import IdeaRepository


def test_documents_are_initialized(tmp_path):
    data_dir = tmp_path / "data"
    JsonIdeaStore(data_dir)

    assert json.loads((data_dir / "ideas.json").read_text(encoding="utf-8")) == []
    assert json.loads((data_dir / "labels.json").read_text(encoding="utf-8")) == list(DEFAULT_LABELS)


def test_existing_documents_are_kept(tmp_path):
    (tmp_path / "labels.json").write_text('["Only"]', encoding="utf-8")
    store = JsonIdeaStore(tmp_path)
    assert store.list_labels() == ["Only"]


def test_non_list_documents_fall_back(tmp_path):
    store = JsonIdeaStore(tmp_path)
    store.ideas_file.write_text('{"not": "a list"}', encoding="utf-8")
    store.labels_file.write_text('"nope"', encoding="utf-8")

    assert store.list_ideas() == []
    assert store.list_labels() == sorted(DEFAULT_LABELS)


def test_corrupt_documents_fall_back(tmp_path):
    store = JsonIdeaStore(tmp_path)
    store.ideas_file.write_text("[{broken", encoding="utf-8")
    store.labels_file.write_text("", encoding="utf-8")

    assert store.list_ideas() == []
    assert store.get_idea("anything") is None
    assert store.list_labels() == sorted(DEFAULT_LABELS)


def test_records_are_normalized_on_read(tmp_path):
    store = JsonIdeaStore(tmp_path)
    legacy = [
        {
            "id": "legacy-1",
            "title": "Old idea",
            "status": "new",
            "tags": ["x"],
            "aiChat": [{"role": "user", "text": "hi", "at": "2025-01-01T00:00:00.000Z"}],
            "createdAt": "2025-01-01T00:00:00.000Z",
            "updatedAt": "2025-01-02T00:00:00.000Z",
        },
        "not-an-object",
    ]
    store.ideas_file.write_text(json.dumps(legacy), encoding="utf-8")

    ideas = store.list_ideas()

    assert len(ideas) == 1
    idea = ideas[0]
    assert idea.label == ""
    assert idea.attachments == []
    assert idea.chat_transcript[0]["text"] == "hi"


def test_documents_use_camel_case_keys(tmp_path):
    repo = IdeaRepository(JsonIdeaStore(tmp_path))
    repo.create_idea(IdeaCreate(title="Disk shape"))

    (stored,) = json.loads((tmp_path / "ideas.json").read_text(encoding="utf-8"))

    assert set(stored) == {
        "id",
        "title",
        "description",
        "status",
        "label",
        "tags",
        "attachments",
        "chatTranscript",
        "createdAt",
        "updatedAt",
    }


def test_label_document_keeps_insertion_order(tmp_path):
    store = JsonIdeaStore(tmp_path)
    store.add_label("Alpha")

    on_disk = json.loads(store.labels_file.read_text(encoding="utf-8"))

    assert on_disk == list(DEFAULT_LABELS) + ["Alpha"]
    assert store.list_labels() == sorted(on_disk)


def test_remove_label_refreshes_cleared_ideas(tmp_path):
    repo = IdeaRepository(JsonIdeaStore(tmp_path))
    idea = repo.create_idea({"title": "Bot", "label": "Agent"})

    repo.remove_label("Agent")

    cleared = repo.get_idea(idea.id)
    assert cleared.label == ""
    assert cleared.updated_at >= idea.updated_at
    on_disk = json.loads((tmp_path / "labels.json").read_text(encoding="utf-8"))
    assert "Agent" not in on_disk


def test_store_without_create_leaves_directory_untouched(tmp_path):
    store = JsonIdeaStore(tmp_path / "missing", create=False)

    assert store.list_ideas() == []
    assert not (tmp_path / "missing").exists()


def test_readers_wait_for_writers(tmp_path):
    store = JsonIdeaStore(tmp_path)
    results = []

    store._lock.acquire()
    try:
        reader = threading.Thread(target=lambda: results.append(store.list_labels()))
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
        assert results == []
    finally:
        store._lock.release()
    reader.join(timeout=5)

    assert results == [sorted(DEFAULT_LABELS)]
