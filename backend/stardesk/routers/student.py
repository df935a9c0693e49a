"""
Router de l'espace élève : profil, achat et placement du bureau desk1.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from stardesk.database import Database, get_db
from stardesk.dependencies import require_role
from stardesk.policies import STUDENT
from stardesk.schemas.profile import ProfileEnvelope
from stardesk.services import reward_service

router = APIRouter(prefix="/api/student", tags=["Espace élève"])


@router.get("/profile", response_model=ProfileEnvelope, summary="Profil de l'élève")
def get_profile(student: Dict[str, Any] = Depends(require_role(STUDENT)), db: Database = Depends(get_db)):
    """Retourne le solde d'étoiles, l'inventaire et les objets placés. Crée le profil s'il n'existe pas."""
    return ProfileEnvelope(profile=reward_service.get_profile(db, student))


@router.post("/buy-desk1", response_model=ProfileEnvelope, summary="Acheter le bureau")
def buy_desk1(student: Dict[str, Any] = Depends(require_role(STUDENT)), db: Database = Depends(get_db)):
    """Débite 5 étoiles. 409 si déjà possédé, 400 si solde insuffisant."""
    return ProfileEnvelope(profile=reward_service.buy_desk1(db, student))


@router.post("/toggle-desk1", response_model=ProfileEnvelope, summary="Placer ou retirer le bureau")
def toggle_desk1(student: Dict[str, Any] = Depends(require_role(STUDENT)), db: Database = Depends(get_db)):
    """Inverse le placement du bureau. 400 s'il n'a pas été acheté."""
    return ProfileEnvelope(profile=reward_service.toggle_desk1_placement(db, student))
