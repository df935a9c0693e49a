"""
Service métier pour les retours de l'enseignant.
La création d'un retour marque le rendu comme corrigé et crédite l'élève
d'autant d'étoiles que la note (bornée entre 1 et 5).
"""

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from stardesk.database import Database
from stardesk.exceptions import Conflict, Forbidden, NotFound
from stardesk.policies import owns_submission
from stardesk.schemas.feedback import FeedbackCreate, FeedbackResponse, FeedbackResult
from stardesk.security import new_id
from stardesk.services.reward_service import award_stars

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def clamp_rating(rating: float) -> int:
    """Arrondi à l'entier le plus proche (0.5 vers le haut), puis borné entre 1 et 5."""
    rounded = int(Decimal(str(rating)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(MIN_RATING, min(MAX_RATING, rounded))


def create_feedback(db: Database, teacher: Dict[str, Any], data: FeedbackCreate) -> FeedbackResult:
    """
    Note un rendu.

    Validations :
    1. Le rendu existe (NotFound)
    2. Aucun retour n'existe déjà pour ce rendu (Conflict)
    3. Le devoir du rendu a été créé par cet enseignant (Forbidden)

    Le retour, le marquage checked et le crédit d'étoiles sont écrits en un seul commit.
    """
    submission = db.find("submissions", id=data.submission_id) if data.submission_id else None
    if submission is None:
        raise NotFound("Rendu introuvable.")
    if db.find("feedbacks", submissionId=submission["id"]):
        raise Conflict("Ce rendu a déjà reçu un retour.")
    if not owns_submission(db, teacher, submission):
        raise Forbidden("Ce rendu ne concerne pas un de vos devoirs.")

    feedback = db.add("feedbacks", {
        "id": new_id(),
        "submissionId": submission["id"],
        "teacherId": teacher["id"],
        "rating": clamp_rating(data.rating),
        "feedback": data.feedback,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    submission["checked"] = True
    profile = award_stars(db, submission["studentId"], feedback["rating"])
    db.commit()

    logger.info(
        "Rendu %s noté %d par %s : élève %s à %d étoile(s)",
        submission["id"], feedback["rating"], teacher["id"], submission["studentId"], profile["stars"],
    )
    return FeedbackResult(
        feedback=FeedbackResponse.model_validate(feedback),
        awarded_stars=feedback["rating"],
        current_stars=profile["stars"],
    )
