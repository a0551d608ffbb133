# /psyassist/services/report_service.py

"""
Report generation for completed assessments.

Generating a report takes a snapshot of the assessment (child block,
psychologist, aggregate), persists it as a write-once Report row and renders
it to plain text. Stored reports are rendered again from their snapshot, so a
download always shows the assessment as it was when the report was made.
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.config import REPORT_FILE_PREFIX
from ..core.deps import SessionContext
from ..core.exceptions import ReportPreconditionError
from ..db.models.assessment_models import Report
from ..models.assessment_model import AssessmentStatus
from ..models.report_model import ReportPreview
from .assessment_helpers.aggregate import selected_recommendations
from .assessment_helpers.scoring import interpret_score
from .assessment_helpers.serialization import dump_assessment_data, load_assessment_data
from .child_helpers.age import age_in_years
from .database_service import DatabaseService
from .report_helpers.findings import group_findings_by_domain
from .report_helpers.text_renderer import render_report_text

logger = logging.getLogger(__name__)


def report_file_name(child_name: str, prefix: str = REPORT_FILE_PREFIX) -> str:
    return f"{prefix}_{child_name.strip().replace(' ', '_')}.txt"


def _psychologist_name(context: SessionContext, psychologist_name: Optional[str]) -> str:
    if psychologist_name and psychologist_name.strip():
        return psychologist_name.strip()
    return context.display_name or ""


def render_snapshot(snapshot: Dict[str, Any], report_id: Optional[str] = None) -> str:
    """Renders a stored report snapshot back to text."""
    child = snapshot.get("child") or {}
    generated_at = snapshot.get("generatedAt")
    return render_report_text(
        child_name=child.get("name", ""),
        date_of_birth=date.fromisoformat(child["dateOfBirth"]) if child.get("dateOfBirth") else None,
        age=child.get("age", 0),
        data=load_assessment_data(snapshot.get("assessment"), report_id),
        psychologist=snapshot.get("psychologist", ""),
        generated_on=datetime.fromisoformat(generated_at).date() if generated_at else None,
    )


def _detail(report: Report) -> Dict:
    return {
        "id": report.id,
        "assessmentId": report.assessment_id,
        "childName": report.child_name,
        "createdAt": report.created_at,
        "fileName": report_file_name(report.child_name),
        "text": render_snapshot(report.report_data, report.id),
    }


def generate_report(
    assessment_id: str,
    db: DatabaseService,
    context: SessionContext,
    psychologist_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[Dict]:
    """
    Creates and persists the report of a completed assessment.

    Returns None if the user has no such assessment and raises
    ReportPreconditionError if it is not completed yet.
    """
    assessment = db.get_assessment(assessment_id, context.user_id)
    if not assessment:
        return None
    if assessment.status != AssessmentStatus.COMPLETED.value:
        raise ReportPreconditionError("Only completed assessments can be reported. Complete the assessment first.")

    child = db.get_child(assessment.child_id, context.user_id)
    if not child:
        raise LookupError(f"Child with ID {assessment.child_id} not found.")

    now = now or datetime.now(timezone.utc)
    data = load_assessment_data(assessment.assessment_data, assessment.id)
    snapshot = {
        "child": {
            "name": child.name,
            "dateOfBirth": child.date_of_birth.isoformat(),
            "age": age_in_years(child.date_of_birth, now.date()),
        },
        "psychologist": _psychologist_name(context, psychologist_name),
        "generatedAt": now.isoformat(),
        "assessment": dump_assessment_data(data),
    }

    report = db.add_report({
        "id": f"rep_{uuid.uuid4().hex[:16]}",
        "assessment_id": assessment.id,
        "child_name": child.name,
        "user_id": context.user_id,
        "report_data": snapshot,
    })
    logger.info("Report %s generated for assessment %s.", report.id, assessment.id)
    return _detail(report)


def get_report_preview(
    assessment_id: str,
    db: DatabaseService,
    context: SessionContext,
    psychologist_name: Optional[str] = None,
    as_of: Optional[date] = None,
) -> Optional[ReportPreview]:
    """Structured report view with score bands and domain findings; nothing is persisted."""
    assessment = db.get_assessment(assessment_id, context.user_id)
    if not assessment:
        return None
    child = db.get_child(assessment.child_id, context.user_id)
    if not child:
        return None

    data = load_assessment_data(assessment.assessment_data, assessment.id)
    strengths, weaknesses = group_findings_by_domain(data.scores)
    return ReportPreview(
        child={
            "name": child.name,
            "dateOfBirth": child.date_of_birth,
            "age": age_in_years(child.date_of_birth, as_of),
        },
        psychologist=_psychologist_name(context, psychologist_name),
        assessmentDate=data.assessmentDate,
        referralReason=data.referralReason,
        scores=[
            {**score.model_dump(), "band": interpret_score(score.standardScore, score.scaleType)}
            for score in data.scores
        ],
        strengthsByDomain=strengths,
        weaknessesByDomain=weaknesses,
        observations=data.observations,
        recommendations=[rec.title for rec in selected_recommendations(data)],
        passages=data.chcPassages,
    )


def list_reports(db: DatabaseService, context: SessionContext) -> List[Dict]:
    return [
        {
            "id": report.id,
            "assessmentId": report.assessment_id,
            "childName": report.child_name,
            "createdAt": report.created_at,
        }
        for report in db.get_all_reports(context.user_id)
    ]


def get_report(report_id: str, db: DatabaseService, context: SessionContext) -> Optional[Dict]:
    report = db.get_report(report_id, context.user_id)
    return _detail(report) if report else None
