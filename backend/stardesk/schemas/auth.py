"""
Schémas Pydantic pour l'inscription, la connexion et la vue publique d'un utilisateur.
"""

from datetime import datetime
from typing import Optional

from pydantic import ValidationInfo, field_validator

from stardesk.schemas.common import CamelModel, not_blank

VALID_ROLES = {"teacher", "student"}


class RegisterRequest(CamelModel):
    name: str
    role: str
    username: str
    password: str

    @field_validator("name", "username")
    @classmethod
    def field_not_empty(cls, v: str, info: ValidationInfo) -> str:
        return not_blank(v, info.field_name)

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        # Pas de strip : les espaces font partie du mot de passe
        if not v:
            raise ValueError("Le champ password est obligatoire.")
        return v

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: str) -> str:
        if v not in VALID_ROLES:
            raise ValueError(f"Rôle invalide. Valeurs acceptées : {sorted(VALID_ROLES)}")
        return v


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: Optional[str]) -> Optional[str]:
        # Même normalisation qu'à l'inscription
        return v.strip() if v is not None else None


class UserResponse(CamelModel):
    """Vue publique : jamais le hash du mot de passe."""
    id: str
    name: str
    role: str
    username: str
    created_at: datetime


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse
