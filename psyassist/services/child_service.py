# /psyassist/services/child_service.py

"""
Business logic for the children a psychologist assesses.

Every function takes the request's `SessionContext` and scopes all reads and
writes to `context.user_id`. The list view enriches each child with the
figures shown on the children page: current age, number of assessments, date
of the last assessment and a status derived from the assessment statuses.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..core.deps import SessionContext
from ..db.models.child_models import Child
from ..models import child_model
from ..models.assessment_model import AssessmentStatus
from .child_helpers.age import age_in_years
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _child_to_dict(child: Child, as_of: Optional[date] = None) -> Dict:
    return {
        "id": child.id,
        "name": child.name,
        "dateOfBirth": child.date_of_birth,
        "notes": child.notes,
        "age": age_in_years(child.date_of_birth, as_of),
        "createdAt": child.created_at,
        "updatedAt": child.updated_at,
    }


def derive_child_status(assessment_statuses: Iterable[str]) -> child_model.ChildStatus:
    statuses = set(assessment_statuses)
    if AssessmentStatus.IN_PROGRESS.value in statuses:
        return child_model.ChildStatus.ACTIVE
    if AssessmentStatus.COMPLETED.value in statuses:
        return child_model.ChildStatus.COMPLETED
    return child_model.ChildStatus.PENDING


# --- Facade Methods for CRUD Operations ---

def create_child(child_data: child_model.ChildCreate, db: DatabaseService, context: SessionContext) -> Dict:
    """Creates a child, stamping the owner's user_id onto the record."""
    name = child_data.name.strip()
    if not name:
        raise ValueError("Child name is required.")

    child_record = {
        "name": name,
        "date_of_birth": child_data.dateOfBirth,
        "notes": child_data.notes,
        "user_id": context.user_id,
    }
    new_child = db.add_child(child_record)
    logger.info("Child %s created for user %s.", new_child.id, context.user_id)
    return _child_to_dict(new_child)


def get_child_by_id(child_id: str, db: DatabaseService, context: SessionContext) -> Optional[Dict]:
    child = db.get_child(child_id, context.user_id)
    return _child_to_dict(child) if child else None


def update_child(
    child_id: str,
    child_update: child_model.ChildUpdate,
    db: DatabaseService,
    context: SessionContext,
) -> Optional[Dict]:
    update_data = child_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")

    column_data = {}
    if "name" in update_data:
        name = (update_data["name"] or "").strip()
        if not name:
            raise ValueError("Child name is required.")
        column_data["name"] = name
    if "dateOfBirth" in update_data:
        if update_data["dateOfBirth"] is None:
            raise ValueError("Date of birth is required.")
        column_data["date_of_birth"] = update_data["dateOfBirth"]
    if "notes" in update_data:
        column_data["notes"] = update_data["notes"]

    updated_child = db.update_child(child_id, context.user_id, column_data)
    return _child_to_dict(updated_child) if updated_child else None


def delete_child(child_id: str, db: DatabaseService, context: SessionContext) -> bool:
    was_deleted = db.delete_child(child_id, context.user_id)
    if was_deleted:
        logger.info("Child %s and its assessments deleted for user %s.", child_id, context.user_id)
    return was_deleted


# --- Data Assembly ---

def get_children_with_summary(
    db: DatabaseService,
    context: SessionContext,
    search: Optional[str] = None,
    as_of: Optional[date] = None,
) -> List[Dict]:
    """
    All children of the user, most recent first, each enriched with its
    assessment count, last assessment date and derived status.
    """
    all_children = db.get_all_children(context.user_id)
    if search and search.strip():
        needle = search.strip().lower()
        all_children = [child for child in all_children if needle in child.name.lower()]
    if not all_children:
        return []

    assessments = db.get_all_assessments(context.user_id)
    assessments_df = pd.DataFrame(
        [{"child_id": a.child_id, "status": a.status, "created_at": a.created_at} for a in assessments]
    )

    counts, last_dates, statuses = {}, {}, {}
    if not assessments_df.empty:
        grouped = assessments_df.groupby("child_id")
        counts = grouped.size().to_dict()
        last_dates = grouped["created_at"].max().to_dict()
        statuses = grouped["status"].agg(list).to_dict()

    summary_list = []
    for child in all_children:
        last_assessment = last_dates.get(child.id)
        summary_list.append({
            **_child_to_dict(child, as_of),
            "assessmentsCount": int(counts.get(child.id, 0)),
            "lastAssessment": pd.Timestamp(last_assessment).to_pydatetime() if last_assessment is not None else None,
            "status": derive_child_status(statuses.get(child.id, [])),
        })
    return summary_list
