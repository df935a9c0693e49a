"""
Configuration partagée pour tous les tests.
Override la dépendance get_store avec un MemoryStore neuf : aucun fichier db.json n'est touché.
"""

import pytest
from fastapi.testclient import TestClient

from stardesk.config import settings
from stardesk.database import Database, MemoryStore, get_store
from stardesk.main import app

PASSWORD = "pw12345678"


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """PBKDF2 à 120 000 itérations ralentit inutilement les tests."""
    monkeypatch.setattr(settings, "PBKDF2_ITERATIONS", 1_000)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def db(store):
    return Database(store)


@pytest.fixture
def client(store):
    """Client HTTP de test branché sur le MemoryStore."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Inscrit un utilisateur via l'API et retourne (token, headers, user)."""
    def _register(username, role, name=None, password=PASSWORD):
        response = client.post("/api/auth/register", json={
            "name": name or username,
            "role": role,
            "username": username,
            "password": password,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register


@pytest.fixture
def teacher(register):
    return register("t1", "teacher", name="Mme Kim")


@pytest.fixture
def student(register):
    return register("s1", "student", name="Minji")
