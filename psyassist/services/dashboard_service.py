# /psyassist/services/dashboard_service.py

import logging

from ..core.deps import SessionContext
from ..models.assessment_model import AssessmentStatus
from ..models.dashboard_model import DashboardSummary
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

RECENT_ASSESSMENTS_LIMIT = 5


def get_summary_data(db: DatabaseService, context: SessionContext) -> DashboardSummary:
    """
    Calculates the home-page statistics for the current user.

    Args:
        db: The DatabaseService, provided by dependency injection.
        context: The session context of the request.

    Returns:
        A DashboardSummary with the counts and the most recent assessments.
    """
    try:
        user_id = context.user_id
        recent = db.get_all_assessments(user_id)[:RECENT_ASSESSMENTS_LIMIT]
        return DashboardSummary(
            childCount=db.count_children(user_id),
            assessmentsInProgress=db.count_assessments_by_status(user_id, AssessmentStatus.IN_PROGRESS.value),
            assessmentsCompleted=db.count_assessments_by_status(user_id, AssessmentStatus.COMPLETED.value),
            reportCount=db.count_reports(user_id),
            recentAssessments=[
                {
                    "id": a.id,
                    "childId": a.child_id,
                    "childName": a.child_name,
                    "status": a.status,
                    "createdAt": a.created_at,
                    "updatedAt": a.updated_at,
                }
                for a in recent
            ],
        )
    except Exception:
        logger.exception("Error calculating dashboard summary for user %s.", context.user_id)
        # Re-raise so the router answers with a 500.
        raise
