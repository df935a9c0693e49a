"""
Politique d'autorisation centralisée.

Deux niveaux, évalués avant la logique métier :
- rôle : teacher ou student (authorize, utilisé par la dépendance require_role)
- propriété : un enseignant ne voit et ne note que les devoirs qu'il a créés
"""

from typing import Any, Dict, List, Optional

from stardesk.database import Database
from stardesk.exceptions import Forbidden

TEACHER = "teacher"
STUDENT = "student"

ROLE_MESSAGES = {
    TEACHER: "Réservé aux enseignants.",
    STUDENT: "Réservé aux élèves.",
}


def authorize(user: Optional[Dict[str, Any]], required_role: str) -> Dict[str, Any]:
    """Lève Forbidden si l'utilisateur est absent ou n'a pas le rôle requis."""
    if user is None or user.get("role") != required_role:
        raise Forbidden(ROLE_MESSAGES.get(required_role, "Accès refusé."))
    return user


def owns_homework(user: Dict[str, Any], homework: Optional[Dict[str, Any]]) -> bool:
    return homework is not None and homework.get("teacherId") == user["id"]


def owns_submission(db: Database, user: Dict[str, Any], submission: Dict[str, Any]) -> bool:
    """Un élève possède ses rendus ; un enseignant ceux des devoirs qu'il a créés."""
    if user["role"] == STUDENT:
        return submission.get("studentId") == user["id"]
    return owns_homework(user, db.find("homeworks", id=submission.get("homeworkId")))


def visible_homeworks(db: Database, user: Dict[str, Any]) -> List[Dict[str, Any]]:
    if user["role"] == TEACHER:
        return db.filter("homeworks", teacherId=user["id"])
    return list(db.get_collection("homeworks"))


def visible_submissions(db: Database, user: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [s for s in db.get_collection("submissions") if owns_submission(db, user, s)]
