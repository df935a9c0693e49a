"""
Service d'authentification : inscription, connexion et résolution des jetons de session.

Les sessions sont des jetons opaques stockés dans la collection "sessions"
avec une expiration absolue (expiresAt, en millisecondes epoch).
Pas d'expiration glissante, pas de révocation : un jeton expiré est simplement ignoré.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from stardesk.config import settings
from stardesk.database import Database
from stardesk.exceptions import Conflict, Unauthenticated, ValidationError
from stardesk.policies import STUDENT
from stardesk.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from stardesk.security import hash_password, new_id, new_token, verify_password
from stardesk.services.reward_service import ensure_profile

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def public_user(user: Dict[str, Any]) -> UserResponse:
    return UserResponse.model_validate(user)


def issue_session(db: Database, user_id: str) -> str:
    """Crée une session pour l'utilisateur. Plusieurs sessions simultanées sont autorisées."""
    token = new_token()
    ttl = timedelta(minutes=settings.TOKEN_TTL_MINUTES)
    db.add("sessions", {
        "token": token,
        "userId": user_id,
        "expiresAt": _now_ms() + int(ttl.total_seconds() * 1000),
    })
    return token


def register(db: Database, data: RegisterRequest) -> AuthResponse:
    """
    Inscrit un nouvel utilisateur.

    Validations :
    1. Mot de passe d'au moins PASSWORD_MIN_LENGTH caractères
    2. Identifiant (username) unique
    Un profil élève est créé immédiatement pour le rôle student.
    """
    if len(data.password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Le mot de passe doit contenir au moins {settings.PASSWORD_MIN_LENGTH} caractères."
        )
    if db.find("users", username=data.username):
        raise Conflict("Cet identifiant est déjà utilisé.")

    user = db.add("users", {
        "id": new_id(),
        "name": data.name,
        "role": data.role,
        "username": data.username,
        "passwordHash": hash_password(data.password),
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    if user["role"] == STUDENT:
        ensure_profile(db, user["id"])

    token = issue_session(db, user["id"])
    db.commit()

    logger.info("Inscription de %s (%s)", user["username"], user["role"])
    return AuthResponse(token=token, user=public_user(user))


def login(db: Database, data: LoginRequest) -> AuthResponse:
    """Vérifie l'identifiant et le mot de passe, puis ouvre une nouvelle session."""
    user = db.find("users", username=data.username)
    if user is None or not verify_password(data.password or "", user.get("passwordHash", "")):
        logger.warning("Échec de connexion pour %r", data.username)
        raise Unauthenticated("Identifiant ou mot de passe incorrect.")

    token = issue_session(db, user["id"])
    db.commit()
    return AuthResponse(token=token, user=public_user(user))


def find_user_by_token(db: Database, token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Retourne l'utilisateur d'une session valide, None si le jeton est absent, inconnu ou expiré."""
    if not token:
        return None
    now = _now_ms()
    session = next(
        (s for s in db.get_collection("sessions") if s.get("token") == token and s.get("expiresAt", 0) > now),
        None,
    )
    if session is None:
        return None
    return db.find("users", id=session["userId"])


def resolve(db: Database, token: Optional[str]) -> Dict[str, Any]:
    user = find_user_by_token(db, token)
    if user is None:
        raise Unauthenticated("Authentification requise.")
    return user
