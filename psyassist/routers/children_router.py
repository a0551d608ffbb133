# /psyassist/routers/children_router.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from ..core.deps import SessionContext, get_session_context
from ..models import child_model
from ..services import child_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()

# --- CHILD COLLECTION ENDPOINTS (/api/children) ---

@router.get("", response_model=child_model.ChildListResponse, summary="Get All Children with Assessment Summary")
def get_all_children(
    search: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    try:
        children = child_service.get_children_with_summary(db=db, context=context, search=search)
    except SQLAlchemyError:
        logger.exception("Error fetching children for user %s.", context.user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An error occurred while loading the children.")
    return {"children": children, "total": len(children)}


@router.post("", response_model=child_model.Child, status_code=status.HTTP_201_CREATED, summary="Register a New Child")
def create_child(
    child_create: child_model.ChildCreate,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    try:
        return child_service.create_child(child_data=child_create, db=db, context=context)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error creating a child for user %s.", context.user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An error occurred while saving the child.")

# --- INDIVIDUAL CHILD ENDPOINTS (/api/children/{child_id}) ---

@router.get("/{child_id}", response_model=child_model.Child, summary="Get a Single Child")
def get_child(
    child_id: str,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    child = child_service.get_child_by_id(child_id=child_id, db=db, context=context)
    if child is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Child with ID {child_id} not found")
    return child


@router.put("/{child_id}", response_model=child_model.Child, summary="Update a Child")
def update_child(
    child_id: str,
    child_update: child_model.ChildUpdate,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    try:
        updated_child = child_service.update_child(child_id=child_id, child_update=child_update, db=db, context=context)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error updating child %s.", child_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An error occurred while saving the child.")
    if updated_child is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Child with ID {child_id} not found")
    return updated_child


@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Child and Its Assessments")
def delete_child(
    child_id: str,
    db: DatabaseService = Depends(get_db_service),
    context: SessionContext = Depends(get_session_context),
):
    try:
        was_deleted = child_service.delete_child(child_id=child_id, db=db, context=context)
    except SQLAlchemyError:
        logger.exception("Error deleting child %s.", child_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An error occurred while deleting the child.")
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Child with ID {child_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
