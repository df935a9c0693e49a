"""
Router pour les rendus des élèves.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from stardesk.database import Database, get_db
from stardesk.dependencies import get_current_user, require_role
from stardesk.policies import STUDENT
from stardesk.schemas.submission import SubmissionCreate, SubmissionEnvelope, SubmissionList
from stardesk.services import submission_service

router = APIRouter(prefix="/api/submissions", tags=["Rendus"])


@router.post("", response_model=SubmissionEnvelope, status_code=201, summary="Rendre un devoir")
def create_submission(
    data: SubmissionCreate,
    student: Dict[str, Any] = Depends(require_role(STUDENT)),
    db: Database = Depends(get_db),
):
    """Enregistre un rendu (non corrigé). 404 si le devoir n'existe pas."""
    return SubmissionEnvelope(submission=submission_service.create_submission(db, student, data))


@router.get("", response_model=SubmissionList, summary="Lister les rendus")
def list_submissions(user: Dict[str, Any] = Depends(get_current_user), db: Database = Depends(get_db)):
    """
    Enseignant : rendus de ses devoirs. Élève : ses rendus.
    Chaque rendu inclut le numéro et le contenu du devoir, le nom de l'élève et le retour éventuel.
    """
    return submission_service.list_submissions(db, user)
