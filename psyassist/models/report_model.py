# /psyassist/models/report_model.py

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .assessment_model import CHCPassage, Observation, Score


class ReportRequest(BaseModel):
    """Optional overrides for report generation."""
    psychologistName: Optional[str] = Field(
        default=None,
        description="Name for the signature block. Defaults to the session's display name.",
    )


class ChildBlock(BaseModel):
    name: str
    dateOfBirth: date
    age: int


class InterpretedScore(Score):
    band: str


class ReportPreview(BaseModel):
    """Structured view of a report, before or instead of the text export."""
    model_config = ConfigDict(from_attributes=True)

    child: ChildBlock
    psychologist: str
    assessmentDate: Optional[date] = None
    referralReason: str = ""
    scores: List[InterpretedScore]
    strengthsByDomain: Dict[str, List[Score]]
    weaknessesByDomain: Dict[str, List[Score]]
    observations: List[Observation]
    recommendations: List[str]
    passages: List[CHCPassage] = Field(default_factory=list)


class ReportSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    assessmentId: str
    childName: str
    createdAt: datetime


class ReportDetail(ReportSummary):
    fileName: str
    text: str


class ReportListResponse(BaseModel):
    reports: List[ReportSummary]
