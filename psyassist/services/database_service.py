# /psyassist/services/database_service.py

from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from ..db.database import get_db
from ..db.models.assessment_models import Assessment, Report
from ..db.models.child_models import Child

# --- Repository Imports ---
from .database_helpers.assessment_repository_sql import AssessmentRepositorySQL
from .database_helpers.child_repository_sql import ChildRepositorySQL


class DatabaseService:
    """
    Facade over the SQL repositories. Services talk to this class only, never
    to the repositories or the session directly.
    """

    def __init__(self, db_session: Session):
        if db_session is None:
            raise ValueError("A database session is required.")
        self.child_repo = ChildRepositorySQL(db_session)
        self.assessment_repo = AssessmentRepositorySQL(db_session)

    # --- CHILD METHODS (DELEGATED) ---
    def add_child(self, child_record: Dict) -> Child: return self.child_repo.add_child(child_record)
    def get_child(self, child_id: str, user_id: str) -> Optional[Child]: return self.child_repo.get_child(child_id, user_id)
    def get_all_children(self, user_id: str) -> List[Child]: return self.child_repo.get_all_children(user_id)
    def update_child(self, child_id: str, user_id: str, data: Dict) -> Optional[Child]: return self.child_repo.update_child(child_id, user_id, data)
    def delete_child(self, child_id: str, user_id: str) -> bool: return self.child_repo.delete_child(child_id, user_id)
    def count_children(self, user_id: str) -> int: return self.child_repo.count_children(user_id)

    # --- ASSESSMENT METHODS (DELEGATED) ---
    def add_assessment(self, record: Dict) -> Assessment: return self.assessment_repo.add_assessment(record)
    def get_assessment(self, assessment_id: str, user_id: str) -> Optional[Assessment]: return self.assessment_repo.get_assessment(assessment_id, user_id)
    def get_all_assessments(self, user_id: str, child_id: Optional[str] = None) -> List[Assessment]:
        return self.assessment_repo.get_all_assessments(user_id, child_id=child_id)
    def update_assessment(self, assessment_id: str, user_id: str, data: Dict) -> Optional[Assessment]:
        return self.assessment_repo.update_assessment(assessment_id, user_id, data)
    def delete_assessment(self, assessment_id: str, user_id: str) -> bool: return self.assessment_repo.delete_assessment(assessment_id, user_id)
    def count_assessments_by_status(self, user_id: str, status: str) -> int: return self.assessment_repo.count_assessments_by_status(user_id, status)

    # --- REPORT METHODS (DELEGATED) ---
    def add_report(self, record: Dict) -> Report: return self.assessment_repo.add_report(record)
    def get_report(self, report_id: str, user_id: str) -> Optional[Report]: return self.assessment_repo.get_report(report_id, user_id)
    def get_all_reports(self, user_id: str) -> List[Report]: return self.assessment_repo.get_all_reports(user_id)
    def count_reports(self, user_id: str) -> int: return self.assessment_repo.count_reports(user_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
