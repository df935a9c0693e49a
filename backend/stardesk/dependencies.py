"""
Dépendances FastAPI d'authentification et d'autorisation.

- get_current_user : session valide obligatoire, sinon 401
- require_role(role) : session valide ET rôle attendu, sinon 403 (y compris sans jeton)
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stardesk.database import Database, get_db
from stardesk.policies import authorize
from stardesk.services import auth_service

security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    return auth_service.resolve(db, token)


def require_role(role: str) -> Callable[..., Dict[str, Any]]:
    def dependency(
        token: Optional[str] = Depends(get_bearer_token),
        db: Database = Depends(get_db),
    ) -> Dict[str, Any]:
        return authorize(auth_service.find_user_by_token(db, token), role)

    return dependency
