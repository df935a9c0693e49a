"""
Tests unitaires pour l'inscription, la connexion et les sessions.
"""

import pytest
from pydantic import ValidationError as SchemaValidationError

from stardesk.exceptions import Conflict, Forbidden, Unauthenticated, ValidationError
from stardesk.policies import authorize
from stardesk.schemas.auth import LoginRequest, RegisterRequest
from stardesk.services.auth_service import find_user_by_token, login, register, resolve


# --- Helpers ---

def make_register(**kwargs) -> RegisterRequest:
    return RegisterRequest(
        name=kwargs.get("name", "Mme Kim"),
        role=kwargs.get("role", "teacher"),
        username=kwargs.get("username", "t1"),
        password=kwargs.get("password", "pw12345678"),
    )


# --- Validation des schémas ---

def test_role_invalide():
    with pytest.raises(SchemaValidationError, match="Rôle invalide"):
        make_register(role="admin")


def test_nom_vide_rejete():
    with pytest.raises(SchemaValidationError, match="name"):
        make_register(name="   ")


def test_champ_manquant():
    with pytest.raises(SchemaValidationError):
        RegisterRequest(name="Kim", role="teacher", username="t1")


def test_identifiant_nettoye():
    assert make_register(username="  t1  ").username == "t1"


# --- register ---

def test_inscription_succes(db, store):
    result = register(db, make_register())

    assert result.token
    assert result.user.username == "t1"
    assert result.user.role == "teacher"
    assert "passwordHash" not in result.user.model_dump(by_alias=True)
    # Persisté
    assert len(store.read_collections()["users"]) == 1


def test_inscription_mot_de_passe_trop_court(db):
    with pytest.raises(ValidationError, match="8 caractères"):
        register(db, make_register(password="court"))


def test_inscription_identifiant_deja_pris(db):
    register(db, make_register())
    with pytest.raises(Conflict, match="déjà utilisé"):
        register(db, make_register(name="Autre", role="student"))


def test_inscription_eleve_cree_un_profil(db):
    result = register(db, make_register(username="s1", role="student"))

    profile = db.find("studentProfiles", studentId=result.user.id)
    assert profile["stars"] == 0
    assert profile["inventory"] == {"desk1": False}
    assert profile["placed"] == {"desk1": False}


def test_inscription_enseignant_sans_profil(db):
    register(db, make_register())
    assert db.get_collection("studentProfiles") == []


# --- login ---

def test_connexion_succes_nouvelle_session(db):
    first = register(db, make_register())
    second = login(db, LoginRequest(username="t1", password="pw12345678"))

    assert second.token != first.token
    assert len(db.get_collection("sessions")) == 2
    # Les deux sessions restent valides
    assert resolve(db, first.token)["username"] == "t1"
    assert resolve(db, second.token)["username"] == "t1"


def test_connexion_mauvais_mot_de_passe(db):
    register(db, make_register())
    with pytest.raises(Unauthenticated):
        login(db, LoginRequest(username="t1", password="mauvais-mdp"))


def test_connexion_utilisateur_inconnu(db):
    with pytest.raises(Unauthenticated):
        login(db, LoginRequest(username="fantome", password="pw12345678"))


def test_connexion_sans_champs(db):
    register(db, make_register())
    with pytest.raises(Unauthenticated):
        login(db, LoginRequest())


# --- resolve ---

def test_jeton_absent_ou_inconnu(db):
    with pytest.raises(Unauthenticated):
        resolve(db, None)
    with pytest.raises(Unauthenticated):
        resolve(db, "inconnu")


def test_jeton_expire(db):
    """Après expiresAt, le jeton ne résout plus vers personne (sans être supprimé)."""
    result = register(db, make_register())
    session = db.find("sessions", token=result.token)
    session["expiresAt"] = 0

    assert find_user_by_token(db, result.token) is None
    with pytest.raises(Unauthenticated):
        resolve(db, result.token)
    assert db.find("sessions", token=result.token) is not None


# --- authorize ---

def test_authorize_role_correct():
    user = {"id": "u1", "role": "teacher"}
    assert authorize(user, "teacher") is user


def test_authorize_mauvais_role():
    with pytest.raises(Forbidden, match="enseignants"):
        authorize({"id": "u1", "role": "student"}, "teacher")


def test_authorize_utilisateur_absent():
    with pytest.raises(Forbidden):
        authorize(None, "student")


def test_login_identifiant_normalise():
    assert LoginRequest(username="  s9  ", password="x").username == "s9"
