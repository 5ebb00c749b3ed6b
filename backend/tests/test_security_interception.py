"""
Security tests for cross-user interception.

These tests ensure that:
1. Users cannot read other users' notes
2. Users cannot modify other users' notes
3. Users cannot delete other users' notes
4. A foreign note is indistinguishable from a missing one
5. Session tokens are validated and cannot be forged
"""

import uuid

from helpers import create_note, login, relogin, use_token
from notes_api.utils.jwt_auth import create_access_token


def _login_b(client):
    return login(client, username="userB", email="userb@example.com")


def _login_a(client):
    return login(client, username="userA", email="usera@example.com")


def test_unauthorized_note_access(client):
    """
    Abuse Frame: Interception.
    Ensures User A cannot read User B's notes.
    """
    _login_b(client)
    note_id = create_note(client, title="Private Note", description="Secret content")["id"]

    _login_a(client)
    response = client.get(f"/api/v1/notes/{note_id}")
    assert response.status_code == 404  # Vulnerability prevented


def test_unauthorized_note_modification(client):
    """
    Abuse Frame: Interception/Tampering.
    Ensures User A cannot modify User B's notes.
    """
    _login_b(client)
    note_id = create_note(client, title="Original Title", description="Original content")["id"]

    _login_a(client)
    response = client.put(
        f"/api/v1/notes/{note_id}",
        json={"title": "Hacked Title", "description": "Hacked content"},
    )
    assert response.status_code == 404

    relogin(client, "userB")
    r = client.get(f"/api/v1/notes/{note_id}")
    assert r.status_code == 200
    assert r.json()["title"] == "Original Title"
    assert r.json()["description"] == "Original content"


def test_unauthorized_note_deletion(client):
    """
    Abuse Frame: Interception/Tampering.
    Ensures User A cannot delete User B's notes.
    """
    _login_b(client)
    note_id = create_note(client)["id"]

    _login_a(client)
    response = client.delete(f"/api/v1/notes/{note_id}")
    assert response.status_code == 404

    relogin(client, "userB")
    assert client.get(f"/api/v1/notes/{note_id}").status_code == 200


def test_foreign_note_looks_like_missing_note(client):
    """
    Abuse Frame: Interception - Enumeration.
    The response for someone else's note matches the one for a note that never existed.
    """
    _login_b(client)
    note_id = create_note(client)["id"]

    _login_a(client)
    missing_id = str(uuid.uuid4())
    for method, body in (("GET", None), ("PUT", {"title": "Hacked Title", "description": "Hacked body"}), ("DELETE", None)):
        kwargs = {"json": body} if body else {}
        foreign = client.request(method, f"/api/v1/notes/{note_id}", **kwargs)
        missing = client.request(method, f"/api/v1/notes/{missing_id}", **kwargs)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()


def test_note_list_isolation(client):
    """
    Abuse Frame: Interception - Information Disclosure.
    Ensures User A cannot see User B's notes in the list.
    """
    _login_b(client)
    note_ids = [create_note(client, title=f"Note number {i}")["id"] for i in range(3)]

    _login_a(client)
    a_note_id = create_note(client, title="User A Note")["id"]

    r = client.get("/api/v1/notes")
    assert r.status_code == 200
    a_note_ids = [n["id"] for n in r.json()]
    assert a_note_ids == [a_note_id]
    for note_id in note_ids:
        assert note_id not in a_note_ids


def test_forged_token_does_not_grant_access(client):
    """
    Abuse Frame: Interception - Token Forgery.
    A token for User B signed with the wrong secret is rejected.
    """
    user_b = _login_b(client)
    note_id = create_note(client)["id"]

    use_token(client, create_access_token(user_b["id"], secret="attacker-secret"))
    response = client.get(f"/api/v1/notes/{note_id}")
    assert response.status_code == 401
