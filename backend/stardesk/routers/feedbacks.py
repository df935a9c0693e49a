"""
Router pour les retours de l'enseignant.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from stardesk.database import Database, get_db
from stardesk.dependencies import require_role
from stardesk.policies import TEACHER
from stardesk.schemas.feedback import FeedbackCreate, FeedbackResult
from stardesk.services import feedback_service

router = APIRouter(prefix="/api/feedbacks", tags=["Retours"])


@router.post("", response_model=FeedbackResult, status_code=201, summary="Noter un rendu")
def create_feedback(
    data: FeedbackCreate,
    teacher: Dict[str, Any] = Depends(require_role(TEACHER)),
    db: Database = Depends(get_db),
):
    """
    Note un rendu de 1 à 5 (valeur bornée) et crédite l'élève du même nombre d'étoiles.

    - 404 : rendu introuvable
    - 409 : un retour existe déjà pour ce rendu
    - 403 : le devoir n'appartient pas à cet enseignant
    """
    return feedback_service.create_feedback(db, teacher, data)
