# /psyassist/db/models/assessment_models.py

"""
This module defines the SQLAlchemy ORM models for the `Assessment` and `Report`
entities.

An Assessment row does not normalize its scores, observations, XBA tests,
passages and recommendations into tables of their own. The whole aggregate
lives in the `assessment_data` JSON column and round-trips through a full
read/write of that column. A Report is a write-once snapshot of an assessment
taken when the report was generated.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String
from sqlalchemy.orm import relationship

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Assessment(Base):
    """
    SQLAlchemy model representing one assessment of one child.

    `status` is one of `draft`, `in-progress`, `completed`. `updated_at` is the
    single saved-at timestamp; there is no further audit trail.
    """
    id = Column(String, primary_key=True, index=True)
    status = Column(String, index=True, nullable=False)
    assessment_data = Column(JSON, nullable=True)

    child_id = Column(String, ForeignKey("children.id"), nullable=False, index=True)
    # Denormalized copy so list views do not have to join children.
    child_name = Column(String, nullable=False)
    user_id = Column(String, index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    child = relationship("Child", back_populates="assessments")
    reports = relationship("Report", back_populates="assessment", cascade="all, delete-orphan")


class Report(Base):
    """
    SQLAlchemy model representing a generated report.

    `report_data` holds everything needed to render the text again: the
    child block, the psychologist name and the aggregate at generation time.
    """
    id = Column(String, primary_key=True, index=True)
    assessment_id = Column(String, ForeignKey("assessments.id"), nullable=False, index=True)
    child_name = Column(String, nullable=False)
    user_id = Column(String, index=True, nullable=False)
    report_data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    assessment = relationship("Assessment", back_populates="reports")
