# /psyassist/services/database_helpers/assessment_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Assessment and
Report tables. It is the direct interface to the database for assessment data
and a final point of enforcement for data isolation: every method that reads
or modifies user-owned data requires a `user_id`.
"""

from typing import Dict, List, Optional

from ...db.models.assessment_models import Assessment, Report
from .base_repository_sql import BaseRepositorySQL


class AssessmentRepositorySQL(BaseRepositorySQL):

    # --- Assessment Methods ---

    def add_assessment(self, record: Dict) -> Assessment:
        """
        Creates a new Assessment record. Expects `id`, `user_id` and `status`
        to be stamped by the calling service.
        """
        new_assessment = Assessment(**record)
        self.db.add(new_assessment)
        self._commit()
        self.db.refresh(new_assessment)
        return new_assessment

    def get_assessment(self, assessment_id: str, user_id: str) -> Optional[Assessment]:
        return (
            self.db.query(Assessment)
            .filter(Assessment.id == assessment_id, Assessment.user_id == user_id)
            .first()
        )

    def get_all_assessments(self, user_id: str, child_id: Optional[str] = None) -> List[Assessment]:
        """All assessments of the user (optionally of one child), most recent first."""
        query = self.db.query(Assessment).filter(Assessment.user_id == user_id)
        if child_id:
            query = query.filter(Assessment.child_id == child_id)
        return query.order_by(Assessment.created_at.desc()).all()

    def update_assessment(self, assessment_id: str, user_id: str, data: Dict) -> Optional[Assessment]:
        """Overwrites the given columns of an assessment owned by the user."""
        assessment = self.get_assessment(assessment_id=assessment_id, user_id=user_id)
        if assessment:
            for key, value in data.items():
                setattr(assessment, key, value)
            self._commit()
            self.db.refresh(assessment)
        return assessment

    def delete_assessment(self, assessment_id: str, user_id: str) -> bool:
        assessment = self.get_assessment(assessment_id=assessment_id, user_id=user_id)
        if assessment:
            self.db.delete(assessment)
            self._commit()
            return True
        return False

    def count_assessments_by_status(self, user_id: str, status: str) -> int:
        return (
            self.db.query(Assessment)
            .filter(Assessment.user_id == user_id, Assessment.status == status)
            .count()
        )

    # --- Report Methods ---

    def add_report(self, record: Dict) -> Report:
        """Reports are write-once; there is no update method."""
        new_report = Report(**record)
        self.db.add(new_report)
        self._commit()
        self.db.refresh(new_report)
        return new_report

    def get_report(self, report_id: str, user_id: str) -> Optional[Report]:
        return self.db.query(Report).filter(Report.id == report_id, Report.user_id == user_id).first()

    def get_all_reports(self, user_id: str) -> List[Report]:
        return (
            self.db.query(Report)
            .filter(Report.user_id == user_id)
            .order_by(Report.created_at.desc())
            .all()
        )

    def count_reports(self, user_id: str) -> int:
        return self.db.query(Report).filter(Report.user_id == user_id).count()
