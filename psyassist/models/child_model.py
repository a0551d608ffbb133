# /psyassist/models/child_model.py

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChildStatus(str, Enum):
    ACTIVE = "active"        # at least one assessment in progress
    COMPLETED = "completed"  # assessments exist and all are completed
    PENDING = "pending"      # no assessment yet


class ChildBase(BaseModel):
    """
    The base model for a Child. Contains fields common to create and read operations.
    """
    name: str = Field(..., min_length=1, description="The child's full name.")
    dateOfBirth: date = Field(..., description="Date of birth, used to derive the age.")
    notes: Optional[str] = Field(default=None)


class ChildCreate(ChildBase):
    pass


class ChildUpdate(BaseModel):
    """All fields optional to allow partial updates."""
    name: Optional[str] = Field(default=None, min_length=1)
    dateOfBirth: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class Child(ChildBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    age: int
    createdAt: datetime
    updatedAt: datetime


class ChildSummary(Child):
    assessmentsCount: int = 0
    lastAssessment: Optional[datetime] = None
    status: ChildStatus = ChildStatus.PENDING


class ChildListResponse(BaseModel):
    children: List[ChildSummary]
    total: int
