# /psyassist/routers/dashboard_router.py

from fastapi import APIRouter, Depends

from ..core.deps import SessionContext, get_session_context
from ..models.dashboard_model import DashboardSummary
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Counts of children, assessments and reports, plus the most recent assessments.",
)
def get_dashboard_summary(
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    # Thin router: the service does the work.
    return dashboard_service.get_summary_data(db=db, context=context)
