TEST_SECRET = "dev-secret-for-tests"

DEFAULT_USER = {
    "username": "testuser123",
    "fullName": "Test User",
    "email": "test@example.com",
    "password": "password123",
}

DEFAULT_NOTE = {
    "title": "Test Note Title",
    "description": "This is a test note description",
}


def make_user(**overrides):
    data = dict(DEFAULT_USER)
    data.update(overrides)
    return data


def register(client, **overrides):
    data = make_user(**overrides)
    r = client.post("/api/user/register", json=data)
    assert r.status_code == 201, r.text
    return data


def login(client, **overrides):
    """Register a user, log in and leave only that user's session cookie on the client."""
    data = register(client, **overrides)
    client.cookies.clear()
    r = client.post("/api/user/login", json={"username": data["username"], "password": data["password"]})
    assert r.status_code == 200, r.text
    return r.json()


def use_token(client, token):
    client.cookies.clear()
    if token is not None:
        client.cookies.set("token", token)


def create_note(client, **overrides):
    payload = dict(DEFAULT_NOTE)
    payload.update(overrides)
    r = client.post("/api/v1/notes", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def relogin(client, username, password="password123"):
    """Switch the client's session to an already registered user."""
    client.cookies.clear()
    r = client.post("/api/user/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()
