"""
Schémas Pydantic pour les rendus des élèves.
"""

from datetime import datetime
from typing import List, Optional

from stardesk.schemas.common import CamelModel
from stardesk.schemas.feedback import FeedbackResponse


class SubmissionCreate(CamelModel):
    # Absent → 404 (devoir introuvable), pas 400
    homework_id: Optional[str] = None
    upload_text: str = ""
    teacher_message: Optional[str] = ""


class SubmissionResponse(CamelModel):
    id: str
    homework_id: str
    student_id: str
    upload_text: Optional[str] = ""
    teacher_message: str
    checked: bool
    created_at: datetime


class SubmissionDetail(SubmissionResponse):
    """Rendu enrichi du devoir, du nom de l'élève et du retour s'il existe."""
    homework_number: Optional[str] = None
    homework_content: Optional[str] = None
    student_name: Optional[str] = None
    feedback: Optional[FeedbackResponse] = None


class SubmissionEnvelope(CamelModel):
    submission: SubmissionResponse


class SubmissionList(CamelModel):
    submissions: List[SubmissionDetail]
