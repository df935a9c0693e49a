"""
Service métier pour les devoirs.
Seul statut atteignable : "assigned" (aucune transition de clôture ou d'expiration).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from stardesk.database import Database
from stardesk.policies import visible_homeworks
from stardesk.schemas.homework import HomeworkCreate, HomeworkList, HomeworkResponse
from stardesk.security import new_id

logger = logging.getLogger(__name__)

STATUS_ASSIGNED = "assigned"


def format_homework_number(sequence: int) -> str:
    return f"HW-{sequence:04d}"


def create_homework(db: Database, teacher: Dict[str, Any], data: HomeworkCreate) -> HomeworkResponse:
    """
    Crée un devoir pour l'enseignant connecté.

    Le numéro d'affichage (HW-0001, HW-0002...) vient d'un compteur global stocké
    avec les collections. Deux créations simultanées peuvent obtenir le même numéro.
    """
    homework = db.add("homeworks", {
        "id": new_id(),
        "teacherId": teacher["id"],
        "homeworkNumber": format_homework_number(db.next_sequence("homeworks")),
        "content": data.content,
        "count": data.count,
        "deadline": data.deadline,
        "status": STATUS_ASSIGNED,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    db.commit()

    logger.info("Devoir %s créé par %s", homework["homeworkNumber"], teacher["id"])
    return HomeworkResponse.model_validate(homework)


def list_homeworks(db: Database, user: Dict[str, Any]) -> HomeworkList:
    """Un enseignant voit ses propres devoirs, un élève voit tous les devoirs."""
    return HomeworkList(
        homeworks=[HomeworkResponse.model_validate(h) for h in visible_homeworks(db, user)]
    )
