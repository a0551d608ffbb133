# /psyassist/models/dashboard_model.py

from typing import List

from pydantic import BaseModel, Field

from .assessment_model import AssessmentSummary


class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint:
    the statistics cards and the recent-assessments list of the home page.
    """

    childCount: int = Field(..., description="Children registered by the user.", example=12)
    assessmentsInProgress: int = Field(..., description="Assessments still being edited.", example=3)
    assessmentsCompleted: int = Field(..., description="Assessments marked completed.", example=7)
    reportCount: int = Field(..., description="Reports generated so far.", example=9)
    recentAssessments: List[AssessmentSummary] = Field(default_factory=list)
