"""
Tests des backends de stockage (fichier JSON, SQLAlchemy/SQLite, mémoire)
et de l'instantané Database.
"""

import json

import pytest

from stardesk.database import (
    COLLECTIONS,
    Database,
    JsonFileStore,
    MemoryStore,
    SqlStore,
    build_store,
    empty_document,
)


# --- JsonFileStore ---

def test_json_store_cree_le_fichier_au_demarrage(tmp_path):
    path = tmp_path / "db.json"
    JsonFileStore(str(path)).initialize()

    data = json.loads(path.read_text(encoding="utf-8"))
    for name in COLLECTIONS:
        assert data[name] == []


def test_json_store_n_ecrase_pas_un_fichier_existant(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"users": [{"id": "u1"}]}), encoding="utf-8")

    store = JsonFileStore(str(path))
    store.initialize()

    assert store.read_collections()["users"] == [{"id": "u1"}]


def test_json_store_commit_persiste(tmp_path):
    store = JsonFileStore(str(tmp_path / "db.json"))
    db = Database(store)
    db.add("users", {"id": "u1", "username": "t1"})
    db.commit()

    assert Database(store).find("users", username="t1") == {"id": "u1", "username": "t1"}


def test_fichier_ancien_sans_profils_complete(tmp_path):
    """Un document sans studentProfiles ni counters est complété à la lecture."""
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"users": [], "homeworks": []}), encoding="utf-8")

    db = Database(JsonFileStore(str(path)))

    assert db.get_collection("studentProfiles") == []
    assert db.get_collection("sessions") == []


# --- SqlStore ---

def test_sql_store_aller_retour(tmp_path):
    store = SqlStore(f"sqlite:///{tmp_path / 'stardesk.db'}")
    store.initialize()

    db = Database(store)
    db.add("homeworks", {"id": "h1", "content": "Lire le chapitre 1"})
    db.next_sequence("homeworks")
    db.commit()

    reloaded = Database(store)
    assert reloaded.find("homeworks", id="h1")["content"] == "Lire le chapitre 1"
    assert reloaded.next_sequence("homeworks") == 2


def test_sql_store_second_commit_remplace(tmp_path):
    store = SqlStore(f"sqlite:///{tmp_path / 'stardesk.db'}")
    db = Database(store)
    db.add("users", {"id": "u1"})
    db.commit()

    db = Database(store)
    db.set_collection("users", [])
    db.commit()

    assert Database(store).get_collection("users") == []


# --- MemoryStore / Database ---

def test_memory_store_isole_les_instantanes():
    """Sans commit, les modifications d'un instantané ne sont pas visibles."""
    store = MemoryStore()
    db = Database(store)
    db.add("users", {"id": "u1"})

    assert Database(store).get_collection("users") == []


def test_find_et_filter():
    db = Database(MemoryStore({
        **empty_document(),
        "homeworks": [
            {"id": "h1", "teacherId": "t1"},
            {"id": "h2", "teacherId": "t2"},
            {"id": "h3", "teacherId": "t1"},
        ],
    }))

    assert db.find("homeworks", id="h2")["teacherId"] == "t2"
    assert db.find("homeworks", id="absent") is None
    assert [h["id"] for h in db.filter("homeworks", teacherId="t1")] == ["h1", "h3"]


def test_compteur_initialise_depuis_la_collection():
    """Document sans compteur : la séquence reprend après les devoirs existants."""
    db = Database(MemoryStore({"homeworks": [{"id": "h1"}, {"id": "h2"}]}))

    assert db.next_sequence("homeworks") == 3
    assert db.next_sequence("homeworks") == 4


def test_build_store_backend_inconnu(monkeypatch):
    from stardesk.config import settings

    monkeypatch.setattr(settings, "STORE_BACKEND", "mongo")
    with pytest.raises(RuntimeError, match="STORE_BACKEND"):
        build_store()


def test_build_store_memory(monkeypatch):
    from stardesk.config import settings

    monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
    assert isinstance(build_store(), MemoryStore)
