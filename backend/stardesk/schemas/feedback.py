"""
Schémas Pydantic pour les retours de l'enseignant (déclencheur des étoiles).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stardesk.schemas.common import CamelModel


class FeedbackCreate(CamelModel):
    submission_id: Optional[str] = None
    rating: float = Field(allow_inf_nan=False)
    feedback: str = ""


class FeedbackResponse(CamelModel):
    id: str
    submission_id: str
    teacher_id: str
    # null dans les anciens fichiers quand la note envoyée n'était pas numérique
    rating: Optional[int] = None
    feedback: Optional[str] = ""
    created_at: datetime


class FeedbackResult(CamelModel):
    feedback: FeedbackResponse
    awarded_stars: int
    current_stars: int
