"""
Moteur de récompenses : solde d'étoiles, achat et placement du bureau (desk1).

Le solde ne devient jamais négatif : chaque débit est précédé d'une vérification.
Les étoiles sont créditées par feedback_service lors de la notation d'un rendu.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from stardesk.config import settings
from stardesk.database import Database
from stardesk.exceptions import Conflict, InsufficientFunds, PreconditionFailed
from stardesk.schemas.profile import ProfileResponse
from stardesk.security import new_id

logger = logging.getLogger(__name__)


def _touch(profile: Dict[str, Any]) -> None:
    profile["updatedAt"] = datetime.now(timezone.utc).isoformat()


def ensure_profile(db: Database, student_id: str) -> Dict[str, Any]:
    """
    Accesseur idempotent : retourne le profil de l'élève, en le créant s'il n'existe pas.
    Seul point de création des profils (au plus un par élève).
    L'appelant est responsable du commit.
    """
    profile = db.find("studentProfiles", studentId=student_id)
    if profile is None:
        profile = db.add("studentProfiles", {
            "id": new_id(),
            "studentId": student_id,
            "stars": 0,
            "inventory": {"desk1": False},
            "placed": {"desk1": False},
            "updatedAt": datetime.now(timezone.utc).isoformat(),
        })
    # Profils écrits par d'anciennes versions : inventaire absent, étoiles à null
    if profile.get("stars") is None:
        profile["stars"] = 0
    for key in ("inventory", "placed"):
        if not isinstance(profile.get(key), dict):
            profile[key] = {}
        profile[key].setdefault("desk1", False)
    return profile


def award_stars(db: Database, student_id: str, stars: int) -> Dict[str, Any]:
    profile = ensure_profile(db, student_id)
    profile["stars"] += stars
    _touch(profile)
    return profile


def get_profile(db: Database, student: Dict[str, Any]) -> ProfileResponse:
    profile = ensure_profile(db, student["id"])
    db.commit()
    return ProfileResponse.model_validate(profile)


def buy_desk1(db: Database, student: Dict[str, Any]) -> ProfileResponse:
    """
    Achète le bureau desk1.
    Lève Conflict s'il est déjà possédé, InsufficientFunds si le solde est inférieur au prix.
    """
    profile = ensure_profile(db, student["id"])
    if profile["inventory"]["desk1"]:
        raise Conflict("Ce bureau est déjà dans votre inventaire.")
    if profile["stars"] < settings.DESK1_PRICE:
        raise InsufficientFunds("Pas assez d'étoiles.")

    profile["stars"] -= settings.DESK1_PRICE
    profile["inventory"]["desk1"] = True
    _touch(profile)
    db.commit()

    logger.info("Élève %s : desk1 acheté, solde %d étoile(s)", student["id"], profile["stars"])
    return ProfileResponse.model_validate(profile)


def toggle_desk1_placement(db: Database, student: Dict[str, Any]) -> ProfileResponse:
    """Place ou retire le bureau desk1. Lève PreconditionFailed s'il n'a pas été acheté."""
    profile = ensure_profile(db, student["id"])
    if not profile["inventory"]["desk1"]:
        raise PreconditionFailed("Achetez d'abord ce bureau.")

    profile["placed"]["desk1"] = not profile["placed"]["desk1"]
    _touch(profile)
    db.commit()
    return ProfileResponse.model_validate(profile)
