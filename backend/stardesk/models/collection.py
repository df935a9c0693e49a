"""
Modèle SQLAlchemy du backend embarqué (SqlStore).
Une ligne par collection du document : users, homeworks, ..., counters.
"""

from sqlalchemy import JSON, Column, DateTime, String, func

from stardesk.database import Base


class CollectionRecord(Base):
    __tablename__ = "collections"

    name = Column(String(50), primary_key=True)  # users, homeworks, studentProfiles...
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
