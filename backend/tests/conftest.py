import os

import pytest
from fastapi.testclient import TestClient

from helpers import TEST_SECRET

# cheap hashing for tests; must be set before notes_api.utils.auth_hash is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")
    monkeypatch.delenv("APP_ENV", raising=False)

    from notes_api.config import load_settings
    return load_settings()


@pytest.fixture()
def app(settings):
    from notes_api.main import create_app
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
