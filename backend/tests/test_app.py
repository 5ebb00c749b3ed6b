import json
import uuid

import pytest
from fastapi.testclient import TestClient

from helpers import create_note, login, make_user
from notes_api.config import Settings
from notes_api.main import create_app


def _boom(*args, **kwargs):
    raise OSError("Database connection error")


def test_root_describes_service(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "CRUD Notes API is running!"
    assert body["endpoints"] == {"auth": "/api/user", "notes": "/api/v1/notes"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "development"
    assert body["uptime"] >= 0


def test_unknown_route_is_404(client):
    assert client.get("/api/does-not-exist").status_code == 404


def test_missing_jwt_secret_is_fatal(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(RuntimeError):
        create_app()


def test_unusable_store_stops_startup(tmp_path):
    blocker = tmp_path / "data"
    blocker.write_text("not a directory", encoding="utf-8")
    app = create_app(Settings(data_dir=blocker, jwt_secret="dev-secret-for-tests"))

    with pytest.raises(OSError):
        with TestClient(app):
            pass


@pytest.mark.parametrize(
    "store_method,method,path_suffix,body,detail",
    [
        ("list_notes", "GET", "", None, "Error fetching the data"),
        ("get_note", "GET", "/{id}", None, "Error fetching the data"),
        ("create_note", "POST", "", {"title": "Test Note", "description": "Test Description"}, "Error posting the data"),
        ("update_note", "PUT", "/{id}", {"title": "Test Note", "description": "Test Description"}, "Unable to update the Notes"),
        ("delete_note", "DELETE", "/{id}", None, "Error deleting the Note"),
    ],
)
def test_note_store_faults_are_internal_errors(client, app, monkeypatch, store_method, method, path_suffix, body, detail):
    login(client)
    note = create_note(client)
    monkeypatch.setattr(app.state.database.notes, store_method, _boom)

    kwargs = {"json": body} if body else {}
    r = client.request(method, "/api/v1/notes" + path_suffix.format(id=note["id"]), **kwargs)
    assert r.status_code == 500
    assert r.json()["detail"] == detail


def _bad_record(*args, **kwargs):
    raise KeyError("username")


@pytest.mark.parametrize("fault", [_boom, _bad_record])
def test_register_store_fault_is_internal_error(client, app, monkeypatch, fault):
    monkeypatch.setattr(app.state.database.users, "create", fault)
    r = client.post("/api/user/register", json=make_user())
    assert r.status_code == 500
    assert r.json()["detail"] == "Error creating a new user"


def test_refetch_store_fault_is_internal_error(client, app, monkeypatch):
    login(client)
    monkeypatch.setattr(app.state.database.users, "get", _boom)
    r = client.get("/api/user/refetch")
    assert r.status_code == 500
    assert r.json()["detail"] == "Internal Server Error"


def test_note_id_from_another_store_is_unknown(client):
    login(client)
    r = client.get(f"/api/v1/notes/{uuid.uuid4()}")
    assert r.status_code == 404


def test_malformed_user_record_does_not_block_auth(client, settings):
    broken = settings.data_dir / "users" / "broken" / "user.json"
    broken.parent.mkdir(parents=True, exist_ok=True)
    broken.write_text(json.dumps({"id": "broken"}), encoding="utf-8")

    user = login(client)
    assert user["username"] == "testuser123"


def test_vanished_note_file_does_not_break_listing(client, settings):
    user = login(client)
    note = create_note(client)
    gone = uuid.uuid4()
    dangling = settings.data_dir / "users" / user["id"] / "notes" / f"{gone}.json"
    dangling.symlink_to(settings.data_dir / "missing.json")

    r = client.get("/api/v1/notes")
    assert r.status_code == 200
    assert [n["id"] for n in r.json()] == [note["id"]]
    assert client.get(f"/api/v1/notes/{gone}").status_code == 404
    assert client.delete(f"/api/v1/notes/{gone}").status_code == 404
