"""
Schémas Pydantic pour les devoirs.
"""

from datetime import datetime
from typing import List

from pydantic import ValidationInfo, field_validator

from stardesk.schemas.common import CamelModel, not_blank


class HomeworkCreate(CamelModel):
    content: str
    count: int
    deadline: str

    @field_validator("content", "deadline")
    @classmethod
    def field_not_empty(cls, v: str, info: ValidationInfo) -> str:
        return not_blank(v, info.field_name)

    @field_validator("count")
    @classmethod
    def count_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Le nombre de répétitions doit être au moins 1.")
        return v


class HomeworkResponse(CamelModel):
    id: str
    teacher_id: str
    homework_number: str
    content: str
    count: int
    deadline: str
    status: str
    created_at: datetime


class HomeworkEnvelope(CamelModel):
    homework: HomeworkResponse


class HomeworkList(CamelModel):
    homeworks: List[HomeworkResponse]
