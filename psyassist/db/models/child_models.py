# /psyassist/db/models/child_models.py

"""
SQLAlchemy ORM model for the `Child` entity: the person being assessed.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, String
from sqlalchemy.orm import relationship

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Child(Base):
    """
    A child registered by a psychologist.

    Deleting a child deletes its assessments (and, through them, their
    reports) via the cascade on the relationship.
    """
    __tablename__ = "children"  # Override automatic pluralization

    id = Column(String, primary_key=True, index=True, default=lambda: f"chd_{uuid.uuid4().hex[:12]}")
    name = Column(String, index=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    notes = Column(String, nullable=True)

    # Stamped from the session context; every query filters on it.
    user_id = Column(String, index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    assessments = relationship("Assessment", back_populates="child", cascade="all, delete-orphan")
