# /psyassist/routers/assessments_router.py

import logging
from typing import Callable, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError

from ..core.deps import SessionContext, get_session_context
from ..core.exceptions import AssessmentNotSavedError, ReportPreconditionError, ScoreValidationError
from ..models import assessment_model, report_model
from ..services import report_service
from ..services.assessment_helpers.aggregate import new_assessment_data
from ..services.assessment_helpers.editing_session import AssessmentEditingSession
from ..services.assessment_service import AssessmentService
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_exception(e: Exception) -> HTTPException:
    """Translates a service-layer error into the HTTP error the client sees."""
    if isinstance(e, ScoreValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, (AssessmentNotSavedError, ReportPreconditionError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, LookupError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.exception("Backend error while handling an assessment request.", exc_info=e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="The request could not be completed. Please try again.",
    )


def _not_found(assessment_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assessment with ID {assessment_id} not found")


def _edit_and_save(
    service: AssessmentService,
    context: SessionContext,
    assessment_id: str,
    edit: Callable[[AssessmentEditingSession], object],
):
    """Loads the assessment, applies one edit and saves the whole aggregate back."""
    try:
        session = AssessmentEditingSession.resume(service, context, assessment_id)
        if session is None:
            raise _not_found(assessment_id)
        item = edit(session)
        session.save()
        return item
    except (ValueError, LookupError, SQLAlchemyError) as e:
        raise _to_http_exception(e)

# --- ASSESSMENT COLLECTION ENDPOINTS (/api/assessments) ---

@router.get("", response_model=assessment_model.AssessmentListResponse, summary="List Assessments")
def list_assessments(
    child_id: Optional[str] = None,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    try:
        return {"assessments": service.list_assessments(context, child_id=child_id)}
    except SQLAlchemyError as e:
        raise _to_http_exception(e)


@router.post("", response_model=assessment_model.AssessmentRecord, status_code=status.HTTP_201_CREATED, summary="Create an Assessment (First Save)")
def create_assessment(
    payload: assessment_model.AssessmentCreate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    data = payload.data if payload.data is not None else new_assessment_data()
    try:
        return service.save_assessment(context, data, child_id=payload.childId)
    except (ValueError, LookupError, SQLAlchemyError) as e:
        raise _to_http_exception(e)

# --- INDIVIDUAL ASSESSMENT ENDPOINTS (/api/assessments/{assessment_id}) ---

@router.get("/{assessment_id}", response_model=assessment_model.AssessmentRecord, summary="Load an Assessment")
def get_assessment(
    assessment_id: str,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    record = service.load_assessment(assessment_id, context)
    if record is None:
        raise _not_found(assessment_id)
    return record


@router.put("/{assessment_id}", response_model=assessment_model.AssessmentRecord, summary="Save an Assessment")
def save_assessment(
    assessment_id: str,
    payload: assessment_model.AssessmentSave,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    try:
        record = service.save_assessment(context, payload.data, assessment_id=assessment_id)
    except (ValueError, LookupError, SQLAlchemyError) as e:
        raise _to_http_exception(e)
    if record is None:
        raise _not_found(assessment_id)
    return record


@router.delete("/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assessment")
def delete_assessment(
    assessment_id: str,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    try:
        was_deleted = service.delete_assessment(assessment_id, context)
    except SQLAlchemyError as e:
        raise _to_http_exception(e)
    if not was_deleted:
        raise _not_found(assessment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{assessment_id}/complete", response_model=assessment_model.AssessmentRecord, summary="Mark an Assessment as Completed")
def complete_assessment(
    assessment_id: str,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    try:
        record = service.complete_assessment(assessment_id, context)
    except (ValueError, SQLAlchemyError) as e:
        raise _to_http_exception(e)
    if record is None:
        raise _not_found(assessment_id)
    return record

# --- AGGREGATE ITEM ENDPOINTS ---

@router.post("/{assessment_id}/scores", response_model=assessment_model.Score, status_code=status.HTTP_201_CREATED, summary="Add a Score")
def add_score(
    assessment_id: str,
    payload: assessment_model.ScoreCreate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.add_score(
        payload.tool, payload.standardScore, payload.scaleType, subtest=payload.subtest, notes=payload.notes,
    ))


@router.put("/{assessment_id}/scores/{score_id}/domain", response_model=assessment_model.Score, summary="Tag a Score as Domain Strength or Weakness")
def tag_score_domain(
    assessment_id: str,
    score_id: str,
    payload: assessment_model.DomainTag,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.mark_domain_strength(
        score_id, payload.domain, payload.strength,
    ))


@router.post("/{assessment_id}/observations", response_model=assessment_model.Observation, status_code=status.HTTP_201_CREATED, summary="Log an Observation")
def add_observation(
    assessment_id: str,
    payload: assessment_model.ObservationCreate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.add_observation(payload.content))


@router.post("/{assessment_id}/recommendations", response_model=assessment_model.Recommendation, status_code=status.HTTP_201_CREATED, summary="Add a Custom Recommendation")
def add_recommendation(
    assessment_id: str,
    payload: assessment_model.RecommendationCreate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.add_custom_recommendation(payload.title))


@router.post("/{assessment_id}/recommendations/{recommendation_id}/toggle", response_model=assessment_model.Recommendation, summary="Select or Deselect a Recommendation")
def toggle_recommendation(
    assessment_id: str,
    recommendation_id: str,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.toggle_recommendation(recommendation_id))


@router.post("/{assessment_id}/xba-tests", response_model=assessment_model.XBATest, status_code=status.HTTP_201_CREATED, summary="Map a Test onto a CHC Ability")
def add_xba_test(
    assessment_id: str,
    payload: assessment_model.XBATestCreate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.add_xba_test(
        payload.abilityId,
        source_score_id=payload.sourceScoreId,
        tool=payload.tool,
        subtest=payload.subtest,
        standard_score=payload.standardScore,
        scale_type=payload.scaleType,
    ))


@router.put("/{assessment_id}/passages", response_model=assessment_model.CHCPassage, summary="Set the Passage of a CHC Ability")
def set_passage(
    assessment_id: str,
    payload: assessment_model.PassageUpdate,
    service: AssessmentService = Depends(AssessmentService),
    context: SessionContext = Depends(get_session_context),
):
    return _edit_and_save(service, context, assessment_id, lambda session: session.set_passage(
        payload.abilityId, payload.selectedSentenceIds, payload.customText,
    ))

# --- REPORT ENDPOINTS ---

@router.post("/{assessment_id}/report", summary="Generate and Download the Report", response_class=StreamingResponse)
def generate_report(
    assessment_id: str,
    payload: Optional[report_model.ReportRequest] = None,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    psychologist_name = payload.psychologistName if payload else None
    try:
        report = report_service.generate_report(assessment_id, db, context, psychologist_name=psychologist_name)
    except (ValueError, LookupError, SQLAlchemyError) as e:
        raise _to_http_exception(e)
    if report is None:
        raise _not_found(assessment_id)

    return StreamingResponse(
        iter([report["text"].encode("utf-8")]),
        media_type="text/plain; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(report['fileName'])}",
            "X-Report-Id": report["id"],
        },
    )


@router.get("/{assessment_id}/report/preview", response_model=report_model.ReportPreview, summary="Preview the Report")
def preview_report(
    assessment_id: str,
    psychologist_name: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    preview = report_service.get_report_preview(assessment_id, db, context, psychologist_name=psychologist_name)
    if preview is None:
        raise _not_found(assessment_id)
    return preview
