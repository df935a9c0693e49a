"""
Schémas Pydantic pour le profil élève (étoiles, inventaire, placement).
"""

from datetime import datetime

from stardesk.schemas.common import CamelModel


class DeskItems(CamelModel):
    desk1: bool = False


class ProfileResponse(CamelModel):
    id: str
    student_id: str
    stars: int
    inventory: DeskItems
    placed: DeskItems
    updated_at: datetime


class ProfileEnvelope(CamelModel):
    profile: ProfileResponse
