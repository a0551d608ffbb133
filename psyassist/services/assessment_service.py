# /psyassist/services/assessment_service.py

"""
This module defines the AssessmentService, which persists assessment
aggregates and drives their status.

The aggregate is written wholesale on every save: the first save creates the
row (status `in-progress`, fresh id), later saves overwrite the blob of the
same row. Completion is a separate, explicit action and the only status
transition the service exposes.
"""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import Depends

from ..core.deps import SessionContext
from ..core.exceptions import AssessmentNotSavedError
from ..db.models.assessment_models import Assessment
from ..models.assessment_model import AssessmentData, AssessmentStatus
from .assessment_helpers.aggregate import regenerate_passages, validate_new_scores, validate_new_xba_tests
from .assessment_helpers.serialization import dump_assessment_data, load_assessment_data
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)


def _summary(assessment: Assessment) -> Dict:
    return {
        "id": assessment.id,
        "childId": assessment.child_id,
        "childName": assessment.child_name,
        "status": assessment.status,
        "createdAt": assessment.created_at,
        "updatedAt": assessment.updated_at,
    }


def _record(assessment: Assessment) -> Dict:
    return {**_summary(assessment), "data": load_assessment_data(assessment.assessment_data, assessment.id)}


class AssessmentService:
    def __init__(self, db: DatabaseService = Depends(get_db_service)):
        self.db = db

    # --- SAVE / LOAD ---
    def save_assessment(
        self,
        context: SessionContext,
        data: AssessmentData,
        child_id: Optional[str] = None,
        assessment_id: Optional[str] = None,
    ) -> Optional[Dict]:
        """
        Upserts the aggregate.

        Without `assessment_id` a new record is created for `child_id`. With it,
        the blob of that record is overwritten and its status is left as is.
        Returns None when `assessment_id` names no assessment of the user.
        New scores are range-checked before anything is written.
        """
        data = data.model_copy(deep=True)

        if assessment_id is None:
            if not child_id:
                raise ValueError("A child is required to create an assessment.")
            child = self.db.get_child(child_id, context.user_id)
            if not child:
                raise LookupError(f"Child with ID {child_id} not found.")

            validate_new_scores(AssessmentData(), data)
            validate_new_xba_tests(AssessmentData(), data)
            regenerate_passages(data)
            new_assessment = self.db.add_assessment({
                "id": f"asm_{uuid.uuid4().hex[:16]}",
                "status": AssessmentStatus.IN_PROGRESS.value,
                "assessment_data": dump_assessment_data(data),
                "child_id": child.id,
                "child_name": child.name,
                "user_id": context.user_id,
            })
            logger.info("Assessment %s created for child %s.", new_assessment.id, child.id)
            return _record(new_assessment)

        existing = self.db.get_assessment(assessment_id, context.user_id)
        if not existing:
            return None

        stored = load_assessment_data(existing.assessment_data, existing.id)
        validate_new_scores(stored, data)
        validate_new_xba_tests(stored, data)
        regenerate_passages(data)
        updated = self.db.update_assessment(
            assessment_id, context.user_id, {"assessment_data": dump_assessment_data(data)}
        )
        return _record(updated) if updated else None

    def load_assessment(self, assessment_id: str, context: SessionContext) -> Optional[Dict]:
        assessment = self.db.get_assessment(assessment_id, context.user_id)
        return _record(assessment) if assessment else None

    def list_assessments(self, context: SessionContext, child_id: Optional[str] = None) -> List[Dict]:
        return [_summary(a) for a in self.db.get_all_assessments(context.user_id, child_id=child_id)]

    # --- STATUS ---
    def complete_assessment(self, assessment_id: Optional[str], context: SessionContext) -> Optional[Dict]:
        """
        Marks a saved assessment as completed. Completing an already completed
        assessment is a no-op. There is no way back to `in-progress`.
        """
        if not assessment_id:
            raise AssessmentNotSavedError("The assessment must be saved before it can be completed.")

        assessment = self.db.get_assessment(assessment_id, context.user_id)
        if not assessment:
            return None
        if assessment.status != AssessmentStatus.COMPLETED.value:
            assessment = self.db.update_assessment(
                assessment_id, context.user_id, {"status": AssessmentStatus.COMPLETED.value}
            )
            logger.info("Assessment %s completed.", assessment_id)
        return _record(assessment)

    # --- DELETION ---
    def delete_assessment(self, assessment_id: str, context: SessionContext) -> bool:
        return self.db.delete_assessment(assessment_id, context.user_id)
