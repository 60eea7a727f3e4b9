"""
HTTP surface exercised through FastAPI's TestClient against a temporary data dir.
"""
from __future__ import annotations

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from clubapi.app import create_app
from clubapi.repositories.document_store import DocumentStore
from clubapi.repositories.json_storage import LocalFileBackend
from clubapi.repositories.kv_storage import RemoteKVBackend

from .conftest import FakeKVClient, make_settings


@pytest.fixture()
def client(data_dir):
    settings = make_settings(data_dir)
    app = create_app(settings, DocumentStore(LocalFileBackend(data_dir)))
    return TestClient(app)


def _member(**overrides):
    payload = {"name": "Sam", "memberType": "Player", "positions": ["GK"]}
    payload.update(overrides)
    return payload


def test_club_is_seeded_and_aliased(client):
    club = client.get("/api/club").json()
    assert club["name"] == "AMSAL FC"
    assert client.get("/api/ground").json() == club


def test_update_club_replaces_document(client, data_dir):
    res = client.put("/api/club", json={"name": " New FC ", "groundSize": "100x60"})
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "New FC"
    assert body["fieldType"] == "Natural Grass"
    assert json.loads((data_dir / "club.json").read_text(encoding="utf-8")) == body


def test_member_crud_flow(client):
    res = client.post("/api/members", json=_member(jerseyNo="9"))
    assert res.status_code == 201
    member = res.json()

    dup = client.post("/api/members", json=_member(name="Other", jerseyNo="9"))
    assert dup.status_code == 400
    assert "already taken" in dup.json()["error"]

    missing = client.post("/api/members", json={"name": "NoType"})
    assert missing.status_code == 400

    res = client.put(f"/api/members/{member['id']}", json={"notes": "captain"})
    assert res.status_code == 200
    assert res.json()["notes"] == "captain"
    assert client.put("/api/members/nope", json={}).status_code == 404

    res = client.delete(f"/api/members/{member['id']}")
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "deletedMember": {"id": member["id"], "name": "Sam", "imageUrl": member["imageUrl"]},
    }
    assert client.get("/api/members").json() == []
    assert client.delete(f"/api/members/{member['id']}").status_code == 404


def test_news_flow(client):
    assert client.post("/api/news", json={"headline": "H"}).status_code == 400
    res = client.post("/api/news", json={"headline": "Match day", "description": "Kick-off at 3"})
    assert res.status_code == 201
    item = res.json()
    assert client.get("/api/news").json() == [item]
    res = client.put(f"/api/news/{item['id']}", json={"type": "notice"})
    assert res.json()["type"] == "notice"
    assert client.delete(f"/api/news/{item['id']}").json() == {"success": True}
    assert client.delete(f"/api/news/{item['id']}").status_code == 404


def test_slider_flow(client):
    assert len(client.get("/api/slider").json()) == 2
    assert client.post("/api/slider", json={"id": "1"}).status_code == 400
    res = client.post("/api/slider", json=[{"id": "9", "imageUrl": "x", "active": False}])
    assert res.json()["success"] is True
    assert client.get("/api/slider").json() == []


def test_login_and_admin_management(client):
    assert client.post("/api/login", json={"username": "admin"}).status_code == 400
    assert client.post("/api/login", json={"username": "admin", "password": "bad"}).status_code == 401
    res = client.post("/api/login", json={"username": "Admin", "password": "password123"})
    assert res.status_code == 200
    assert res.json()["role"] == "super"

    res = client.post("/api/admins", json={"username": "coach", "password": "1234"})
    assert res.status_code == 201
    coach = res.json()
    assert "password" not in coach
    assert client.post("/api/admins", json={"username": "COACH", "password": "1234"}).status_code == 400

    listing = client.get("/api/admins").json()
    assert [a["username"] for a in listing] == ["admin", "coach"]

    super_id = listing[0]["id"]
    assert client.delete(f"/api/admins/{super_id}").status_code == 403
    assert client.put(f"/api/admins/{coach['id']}", json={"imageUrl": "pic"}).json()["imageUrl"] == "pic"
    assert client.delete(f"/api/admins/{coach['id']}").json() == {"success": True}


def test_login_is_rate_limited(data_dir):
    settings = make_settings(data_dir, login_rate_limit=2)
    client = TestClient(create_app(settings, DocumentStore(LocalFileBackend(data_dir))))
    for _ in range(2):
        client.post("/api/login", json={"username": "admin", "password": "bad"})
    res = client.post("/api/login", json={"username": "admin", "password": "bad"})
    assert res.status_code == 429
    assert "Too many login attempts" in res.json()["error"]
    assert int(res.headers["Retry-After"]) >= 1


def test_persistence_failure_maps_to_500(client, monkeypatch):
    def _boom(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("clubapi.repositories.json_storage.os.replace", _boom)
    res = client.post("/api/members", json=_member())
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to persist changes"


def test_debug_and_status_local_only(client):
    debug = client.get("/api/debug").json()
    assert debug["remoteAvailable"] is False
    assert debug["environment"] == "test"

    status = client.get("/api/database-status").json()
    assert status["data"]["club"]["source"] == "local"
    assert status["data"]["slider"]["count"] == 2
    assert status["data"]["members"] == {"source": "local", "count": 0, "sample": []}

    res = client.post("/api/sync-database")
    assert res.status_code == 409


def test_sync_database_pushes_local_files(data_dir, kv_client):
    (data_dir).mkdir(parents=True, exist_ok=True)
    (data_dir / "members.json").write_text(json.dumps([{"id": "1", "name": "A"}]), encoding="utf-8")
    store = DocumentStore(LocalFileBackend(data_dir), RemoteKVBackend(kv_client))
    client = TestClient(create_app(make_settings(data_dir), store))

    assert client.get("/api/members").json() == []
    res = client.post("/api/sync-database")
    assert res.status_code == 200
    results = res.json()["results"]
    assert results["members"]["synced"] == 1
    assert results["news"]["skipped"] is True
    assert client.get("/api/members").json() == [{"id": "1", "name": "A"}]


def test_security_headers(client):
    res = client.get("/api/debug")
    assert res.headers["X-Frame-Options"] == "DENY"
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["Cache-Control"] == "no-store"
    assert "Strict-Transport-Security" not in res.headers


class _LoopCheckingKV(FakeKVClient):
    """Records whether each write ran while an event loop was running in its thread."""

    def __init__(self) -> None:
        super().__init__()
        self.writes_on_loop: list[bool] = []

    def set(self, key, value):
        try:
            asyncio.get_running_loop()
            self.writes_on_loop.append(True)
        except RuntimeError:
            self.writes_on_loop.append(False)
        return super().set(key, value)


def test_mutating_routes_keep_storage_io_off_the_event_loop(data_dir):
    kv = _LoopCheckingKV()
    store = DocumentStore(LocalFileBackend(data_dir), RemoteKVBackend(kv))
    client = TestClient(create_app(make_settings(data_dir), store))
    kv.writes_on_loop.clear()

    member = client.post("/api/members", json=_member()).json()
    client.put(f"/api/members/{member['id']}", json={"notes": "x"})
    client.delete(f"/api/members/{member['id']}")
    item = client.post("/api/news", json={"headline": "H", "description": "D"}).json()
    client.put(f"/api/news/{item['id']}", json={"headline": "H2"})
    client.delete(f"/api/news/{item['id']}")
    client.put("/api/club", json={"name": "X"})
    client.post("/api/slider", json=[])
    coach = client.post("/api/admins", json={"username": "coach", "password": "1234"}).json()
    client.delete(f"/api/admins/{coach['id']}")

    assert len(kv.writes_on_loop) == 10
    assert not any(kv.writes_on_loop)


def test_socket_client_is_removed_after_disconnect(client):
    with client.websocket_connect("/ws") as ws:
        assert ws is not None
    assert client.app.state.events.client_count == 0
