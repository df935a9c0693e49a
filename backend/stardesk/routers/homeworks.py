"""
Router pour les devoirs.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from stardesk.database import Database, get_db
from stardesk.dependencies import get_current_user, require_role
from stardesk.policies import TEACHER
from stardesk.schemas.homework import HomeworkCreate, HomeworkEnvelope, HomeworkList
from stardesk.services import homework_service

router = APIRouter(prefix="/api/homeworks", tags=["Devoirs"])


@router.post("", response_model=HomeworkEnvelope, status_code=201, summary="Créer un devoir")
def create_homework(
    data: HomeworkCreate,
    teacher: Dict[str, Any] = Depends(require_role(TEACHER)),
    db: Database = Depends(get_db),
):
    """Crée un devoir numéroté (HW-0001...). Réservé aux enseignants."""
    return HomeworkEnvelope(homework=homework_service.create_homework(db, teacher, data))


@router.get("", response_model=HomeworkList, summary="Lister les devoirs")
def list_homeworks(user: Dict[str, Any] = Depends(get_current_user), db: Database = Depends(get_db)):
    """Enseignant : ses devoirs. Élève : tous les devoirs."""
    return homework_service.list_homeworks(db, user)
