"""
Base commune des schémas : champs Python en snake_case, JSON en camelCase
(homeworkId, uploadText...) comme dans le document stocké.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def not_blank(v: str, field: str) -> str:
    if v is None or not str(v).strip():
        raise ValueError(f"Le champ {field} est obligatoire.")
    return str(v).strip()
