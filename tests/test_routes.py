from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ideaboard.app import create_app
from ideaboard.repositories.json_storage import JsonIdeaStore
from ideaboard.repositories.repository import IdeaRepository


@pytest.fixture()
def client(tmp_path, clean_env):
    repo = IdeaRepository(JsonIdeaStore(tmp_path / "data"))
    with TestClient(create_app(repo)) as c:
        yield c


def test_idea_crud(client):
    res = client.post("/api/ideas", json={"title": "Ship v2", "tags": ["release"]})
    assert res.status_code == 201
    idea = res.json()
    assert idea["status"] == "new"
    assert idea["chatTranscript"] == []
    assert idea["createdAt"] == idea["updatedAt"]

    assert client.get(f"/api/ideas/{idea['id']}").json()["title"] == "Ship v2"
    assert [i["id"] for i in client.get("/api/ideas").json()] == [idea["id"]]

    res = client.put(f"/api/ideas/{idea['id']}", json={"status": "doing"})
    assert res.status_code == 200
    assert res.json()["status"] == "doing"
    assert res.json()["tags"] == ["release"]

    assert client.delete(f"/api/ideas/{idea['id']}").json() == {"ok": True}
    assert client.get(f"/api/ideas/{idea['id']}").status_code == 404


def test_create_idea_requires_title(client):
    assert client.post("/api/ideas", json={"title": "  "}).status_code == 400
    assert client.post("/api/ideas").status_code == 400


def test_unknown_idea_is_404(client):
    assert client.put("/api/ideas/nope", json={"title": "x"}).status_code == 404
    assert client.delete("/api/ideas/nope").status_code == 404
    assert client.post("/api/ideas/nope/research").status_code == 404
    assert client.post("/api/ideas/nope/ai-chat", json={"message": "hi"}).status_code == 404


def test_labels_flow(client):
    assert client.get("/api/labels").json() == ["Agent", "Automation", "Research"]
    assert client.post("/api/labels", json={"name": ""}).status_code == 400

    res = client.post("/api/labels", json={"name": "Growth"})
    assert res.status_code == 201
    assert res.json().count("Growth") == 1

    idea = client.post("/api/ideas", json={"title": "Referrals", "label": "Growth"}).json()
    labels = client.delete("/api/labels/Growth").json()

    assert "Growth" not in labels
    assert client.get(f"/api/ideas/{idea['id']}").json()["label"] == ""


def test_research_and_chat(client):
    idea = client.post("/api/ideas", json={"title": "Inbox bot"}).json()

    research = client.post(f"/api/ideas/{idea['id']}/research").json()["research"]
    assert research.startswith("Project: Inbox bot")

    body = client.post(f"/api/ideas/{idea['id']}/ai-chat", json={"message": "tech stack?"}).json()
    assert body["reply"].startswith("Suggested stack:")
    assert len(body["chat"]) == 2


def test_public_dir_is_served(tmp_path, clean_env, monkeypatch):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>ideas</h1>", encoding="utf-8")
    monkeypatch.setenv("PUBLIC_DIR", str(public))
    from ideaboard.core.config import get_settings

    get_settings.cache_clear()
    repo = IdeaRepository(JsonIdeaStore(tmp_path / "data"))
    with TestClient(create_app(repo)) as c:
        assert "ideas" in c.get("/").text
        assert c.get("/api/labels").status_code == 200
