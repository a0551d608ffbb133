# /psyassist/models/assessment_model.py

"""
Pydantic models for the assessment aggregate and the assessment API contract.

`AssessmentData` is the versioned schema of the JSON blob stored on an
assessment row. Every field has an explicit default, so a blob written by an
older revision (which lacked `xbaTests`, `chcPassages`, `domain`, ...) loads
into the current shape without special cases.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

ASSESSMENT_SCHEMA_VERSION = 2


# --- Core Enumerations ---
class ScaleType(str, Enum):
    Z = "Z"
    S10 = "S10"
    S100 = "S100"


class Domain(str, Enum):
    COGNITIVE = "cognitive"
    DIDACTIC = "didactic"
    EMOTIONAL = "emotional"


class AssessmentStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# --- Aggregate Members ---

class Score(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"sc_{uuid.uuid4().hex[:12]}")
    tool: str = Field(..., min_length=1, description="Diagnostic tool, free text or from the tool catalog.")
    subtest: str = Field(default="")
    standardScore: float
    scaleType: ScaleType
    notes: str = Field(default="")
    domain: Optional[Domain] = None
    strength: Optional[bool] = None


class Observation(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"obs_{uuid.uuid4().hex[:12]}")
    content: str
    timestamp: str


class Recommendation(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"rec_{uuid.uuid4().hex[:12]}")
    title: str = Field(..., min_length=1)
    selected: bool = False


class XBATest(BaseModel):
    """
    Maps one test result onto a CHC ability.

    The result is either a reference to a Score of the same assessment
    (`sourceScoreId`) or an independently entered test.
    """
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"xba_{uuid.uuid4().hex[:12]}")
    abilityId: str
    sourceScoreId: Optional[str] = None
    tool: Optional[str] = None
    subtest: Optional[str] = None
    standardScore: Optional[float] = None
    scaleType: Optional[ScaleType] = None

    @model_validator(mode="after")
    def source_or_independent_test(self):
        if self.sourceScoreId:
            return self
        if not self.tool or self.standardScore is None or self.scaleType is None:
            raise ValueError("An XBA test needs either a source score or a tool, score and scale type.")
        return self


class CHCPassage(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    abilityId: str
    selectedSentenceIds: List[str] = Field(default_factory=list)
    customText: str = Field(default="")
    generatedText: str = Field(default="")


class AssessmentData(BaseModel):
    """The full assessment aggregate as stored in the `assessment_data` column."""
    model_config = ConfigDict(from_attributes=True)
    schemaVersion: int = Field(default=ASSESSMENT_SCHEMA_VERSION)
    referralReason: str = Field(default="")
    assessmentDate: Optional[date] = None
    scores: List[Score] = Field(default_factory=list)
    observations: List[Observation] = Field(default_factory=list)
    xbaTests: List[XBATest] = Field(default_factory=list)
    chcPassages: List[CHCPassage] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)


# --- API Contract Models ---

class ScoreCreate(BaseModel):
    tool: str
    subtest: str = ""
    standardScore: float
    # Kept as a plain string so an unknown scale reaches the validator and is
    # rejected with a message naming it.
    scaleType: str = ScaleType.S100.value
    notes: str = ""


class ObservationCreate(BaseModel):
    content: str


class RecommendationCreate(BaseModel):
    title: str


class DomainTag(BaseModel):
    domain: Domain
    strength: bool


class XBATestCreate(BaseModel):
    abilityId: str
    sourceScoreId: Optional[str] = None
    tool: Optional[str] = None
    subtest: Optional[str] = None
    standardScore: Optional[float] = None
    scaleType: Optional[str] = None


class PassageUpdate(BaseModel):
    abilityId: str
    selectedSentenceIds: List[str] = Field(default_factory=list)
    customText: str = ""


class AssessmentCreate(BaseModel):
    childId: str
    data: Optional[AssessmentData] = None


class AssessmentSave(BaseModel):
    data: AssessmentData


class AssessmentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    childId: str
    childName: str
    status: AssessmentStatus
    createdAt: datetime
    updatedAt: datetime


class AssessmentRecord(AssessmentSummary):
    data: AssessmentData


class AssessmentListResponse(BaseModel):
    assessments: List[AssessmentSummary]
