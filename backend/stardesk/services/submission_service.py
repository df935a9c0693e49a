"""
Service métier pour les rendus des élèves.
Un rendu est créé à chaque envoi ; il n'est ni modifiable ni supprimable.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from stardesk.database import Database
from stardesk.exceptions import NotFound
from stardesk.policies import visible_submissions
from stardesk.schemas.feedback import FeedbackResponse
from stardesk.schemas.submission import (
    SubmissionCreate,
    SubmissionDetail,
    SubmissionList,
    SubmissionResponse,
)
from stardesk.security import new_id

logger = logging.getLogger(__name__)


def create_submission(db: Database, student: Dict[str, Any], data: SubmissionCreate) -> SubmissionResponse:
    """Enregistre le rendu d'un élève. Lève NotFound si le devoir n'existe pas."""
    homework = db.find("homeworks", id=data.homework_id) if data.homework_id else None
    if homework is None:
        raise NotFound("Devoir introuvable.")

    submission = db.add("submissions", {
        "id": new_id(),
        "homeworkId": homework["id"],
        "studentId": student["id"],
        "uploadText": data.upload_text,
        "teacherMessage": data.teacher_message or "",
        "checked": False,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    db.commit()

    logger.info("Rendu %s de l'élève %s pour %s", submission["id"], student["id"], homework["homeworkNumber"])
    return SubmissionResponse.model_validate(submission)


def _enrich(db: Database, submission: Dict[str, Any]) -> SubmissionDetail:
    homework = db.find("homeworks", id=submission["homeworkId"])
    student = db.find("users", id=submission["studentId"])
    feedback = db.find("feedbacks", submissionId=submission["id"])
    return SubmissionDetail(
        **SubmissionResponse.model_validate(submission).model_dump(),
        homework_number=homework["homeworkNumber"] if homework else None,
        homework_content=homework["content"] if homework else None,
        student_name=student["name"] if student else None,
        feedback=FeedbackResponse.model_validate(feedback) if feedback else None,
    )


def list_submissions(db: Database, user: Dict[str, Any]) -> SubmissionList:
    """
    Enseignant : rendus des devoirs qu'il a créés.
    Élève : ses propres rendus.
    Chaque rendu est enrichi du numéro et du contenu du devoir, du nom de l'élève et du retour éventuel.
    """
    return SubmissionList(submissions=[_enrich(db, s) for s in visible_submissions(db, user)])
