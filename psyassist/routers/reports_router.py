# /psyassist/routers/reports_router.py

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from ..core.deps import SessionContext, get_session_context
from ..models import report_model
from ..services import report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=report_model.ReportListResponse, summary="List Generated Reports")
def list_reports(
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    return {"reports": report_service.list_reports(db, context)}


@router.get("/{report_id}", response_model=report_model.ReportDetail, summary="Get a Report with Its Text")
def get_report(
    report_id: str,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    report = report_service.get_report(report_id, db, context)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report with ID {report_id} not found")
    return report


@router.get("/{report_id}/download", summary="Download a Report as Text", response_class=StreamingResponse)
def download_report(
    report_id: str,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    report = report_service.get_report(report_id, db, context)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report with ID {report_id} not found")
    return StreamingResponse(
        iter([report["text"].encode("utf-8")]),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(report['fileName'])}"},
    )
