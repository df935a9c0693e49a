"""
Couche de persistance : un document unique composé de collections plates
(users, homeworks, submissions, feedbacks, sessions, studentProfiles).

Chaque requête suit le cycle lecture complète → mutation en mémoire → écriture complète.
Aucun verrou : deux écritures concurrentes peuvent se marcher dessus (dernier écrivain gagnant).
Le backend (fichier JSON, SQLAlchemy embarqué, mémoire) est injecté via get_store.
"""

import copy
import json
import logging
import os
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Depends
from sqlalchemy import create_engine, select
from sqlalchemy.orm import declarative_base, sessionmaker

from stardesk.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

COLLECTIONS = ("users", "homeworks", "submissions", "feedbacks", "sessions", "studentProfiles")
COUNTERS = "counters"


def empty_document() -> Dict[str, Any]:
    document: Dict[str, Any] = {name: [] for name in COLLECTIONS}
    document[COUNTERS] = {}
    return document


class Store(ABC):
    """Backend de stockage : lit et écrit le document complet."""

    def initialize(self) -> None:
        """Prépare le backend au démarrage (création du fichier, des tables...)."""

    @abstractmethod
    def read_collections(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def write_collections(self, document: Dict[str, Any]) -> None:
        ...


class JsonFileStore(Store):
    """Document JSON unique sur disque, créé s'il est absent."""

    def __init__(self, path: str):
        self.path = path

    def initialize(self) -> None:
        if not os.path.exists(self.path):
            self.write_collections(empty_document())
            logger.info("Fichier de données initialisé : %s", self.path)

    def read_collections(self) -> Dict[str, Any]:
        self.initialize()
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def write_collections(self, document: Dict[str, Any]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)


class SqlStore(Store):
    """Base embarquée via SQLAlchemy : une ligne par collection, contenu en JSON."""

    def __init__(self, url: str):
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def initialize(self) -> None:
        import stardesk.models  # noqa: F401 (enregistre CollectionRecord dans Base.metadata)

        Base.metadata.create_all(bind=self.engine)

    def read_collections(self) -> Dict[str, Any]:
        from stardesk.models.collection import CollectionRecord

        self.initialize()
        session = self.SessionLocal()
        try:
            rows = session.execute(select(CollectionRecord)).scalars().all()
            return {row.name: row.payload for row in rows}
        finally:
            session.close()

    def write_collections(self, document: Dict[str, Any]) -> None:
        from stardesk.models.collection import CollectionRecord

        session = self.SessionLocal()
        try:
            for name, payload in document.items():
                session.merge(CollectionRecord(name=name, payload=payload))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class MemoryStore(Store):
    """Document en mémoire du processus. Copie profonde à chaque lecture/écriture, comme un vrai backend."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self._document = copy.deepcopy(document) if document is not None else empty_document()

    def read_collections(self) -> Dict[str, Any]:
        return copy.deepcopy(self._document)

    def write_collections(self, document: Dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)


class Database:
    """
    Instantané du document chargé pour une requête.
    Les services lisent et modifient les collections puis appellent commit()
    pour réécrire le document complet en une seule fois.
    """

    def __init__(self, store: Store):
        self._store = store
        self._document = store.read_collections()
        for name in COLLECTIONS:
            self._document.setdefault(name, [])
        self._document.setdefault(COUNTERS, {})

    def get_collection(self, name: str) -> List[Dict[str, Any]]:
        return self._document[name]

    def set_collection(self, name: str, items: List[Dict[str, Any]]) -> None:
        self._document[name] = items

    def find(self, name: str, **criteria: Any) -> Optional[Dict[str, Any]]:
        """Premier enregistrement dont tous les champs correspondent aux critères."""
        return next(
            (item for item in self._document[name] if all(item.get(k) == v for k, v in criteria.items())),
            None,
        )

    def filter(self, name: str, **criteria: Any) -> List[Dict[str, Any]]:
        return [
            item for item in self._document[name] if all(item.get(k) == v for k, v in criteria.items())
        ]

    def add(self, name: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self._document[name].append(record)
        return record

    def next_sequence(self, name: str) -> int:
        """
        Compteur monotone stocké à côté des collections.
        Initialisé depuis la taille de la collection pour les fichiers créés sans compteur.
        Non sûr en cas d'écritures concurrentes (même course que le reste du document).
        """
        counters = self._document[COUNTERS]
        current = counters.get(name, len(self._document.get(name, [])))
        counters[name] = current + 1
        return counters[name]

    def commit(self) -> None:
        self._store.write_collections(self._document)


def build_store() -> Store:
    backend = settings.STORE_BACKEND.lower()
    if backend == "json":
        return JsonFileStore(settings.DB_PATH)
    if backend == "sql":
        return SqlStore(settings.DATABASE_URL)
    if backend == "memory":
        return MemoryStore()
    raise RuntimeError(f"STORE_BACKEND inconnu : {settings.STORE_BACKEND}")


@lru_cache
def get_store() -> Store:
    """Dépendance FastAPI : backend de stockage partagé par tout le processus."""
    return build_store()


def get_db(store: Store = Depends(get_store)) -> Iterator[Database]:
    """Dépendance FastAPI : fournit l'instantané du document pour la requête courante."""
    yield Database(store)
