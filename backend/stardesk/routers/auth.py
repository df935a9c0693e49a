"""
Router d'authentification : inscription, connexion, utilisateur courant.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from stardesk.database import Database, get_db
from stardesk.dependencies import get_current_user
from stardesk.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from stardesk.services import auth_service

router = APIRouter(prefix="/api", tags=["Authentification"])


@router.post("/auth/register", response_model=AuthResponse, status_code=201, summary="Créer un compte")
def register(data: RegisterRequest, db: Database = Depends(get_db)):
    """
    Crée un compte enseignant ou élève et ouvre une session.

    - Mot de passe : 8 caractères minimum
    - Identifiant unique (409 sinon)
    - Un profil élève (0 étoile) est créé pour le rôle student
    """
    return auth_service.register(db, data)


@router.post("/auth/login", response_model=AuthResponse, summary="Se connecter")
def login(data: Optional[LoginRequest] = None, db: Database = Depends(get_db)):
    """Ouvre une nouvelle session. Plusieurs sessions simultanées sont autorisées."""
    return auth_service.login(db, data or LoginRequest())


@router.get("/me", response_model=MeResponse, summary="Utilisateur connecté")
def me(user: Dict[str, Any] = Depends(get_current_user)):
    return MeResponse(user=auth_service.public_user(user))
