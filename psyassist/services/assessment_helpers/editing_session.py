# /psyassist/services/assessment_helpers/editing_session.py

"""
An explicit editing session over one assessment aggregate.

The session owns the in-memory aggregate and, once the first save has
succeeded, the persisted id. Every later save goes to that same id, so one
editing session never produces a second record. A failed save raises and
leaves both the aggregate and the id untouched, so the caller can retry.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from ...core.deps import SessionContext
from ...models.assessment_model import (
    AssessmentData, AssessmentStatus, CHCPassage, Domain, Observation, Recommendation, Score, XBATest,
)
from . import aggregate

if TYPE_CHECKING:
    from ..assessment_service import AssessmentService


class AssessmentEditingSession:
    def __init__(
        self,
        service: "AssessmentService",
        context: SessionContext,
        child_id: str,
        data: Optional[AssessmentData] = None,
        assessment_id: Optional[str] = None,
        status: Optional[AssessmentStatus] = None,
    ):
        self.service = service
        self.context = context
        self.child_id = child_id
        self.data = data if data is not None else aggregate.new_assessment_data()
        self.assessment_id = assessment_id
        self.status = status

    @classmethod
    def resume(cls, service: "AssessmentService", context: SessionContext, assessment_id: str) -> Optional["AssessmentEditingSession"]:
        """Re-opens a persisted assessment; None if the user has no such assessment."""
        record = service.load_assessment(assessment_id, context)
        if record is None:
            return None
        return cls(
            service,
            context,
            child_id=record["childId"],
            data=record["data"],
            assessment_id=record["id"],
            status=AssessmentStatus(record["status"]),
        )

    # --- Aggregate edits ---
    def add_score(self, tool: str, standard_score: float, scale_type: str, subtest: str = "", notes: str = "") -> Score:
        return aggregate.add_score(self.data, tool, standard_score, scale_type, subtest=subtest, notes=notes)

    def add_observation(self, content: str, now: Optional[datetime] = None) -> Observation:
        return aggregate.add_observation(self.data, content, now=now)

    def toggle_recommendation(self, recommendation_id: str) -> Recommendation:
        return aggregate.toggle_recommendation(self.data, recommendation_id)

    def add_custom_recommendation(self, title: str) -> Recommendation:
        return aggregate.add_custom_recommendation(self.data, title)

    def mark_domain_strength(self, score_id: str, domain: Domain, is_strength: bool) -> Score:
        return aggregate.mark_domain_strength(self.data, score_id, domain, is_strength)

    def add_xba_test(self, ability_id: str, **test) -> XBATest:
        return aggregate.add_xba_test(self.data, ability_id, **test)

    def set_passage(self, ability_id: str, sentence_ids: Iterable[str], custom_text: str = "") -> CHCPassage:
        return aggregate.set_passage(self.data, ability_id, sentence_ids, custom_text)

    # --- Persistence ---
    def save(self) -> str:
        record = self.service.save_assessment(
            self.context, self.data, child_id=self.child_id, assessment_id=self.assessment_id
        )
        if record is None:
            raise LookupError(f"Assessment {self.assessment_id} no longer exists.")
        self.assessment_id = record["id"]
        self.status = AssessmentStatus(record["status"])
        self.data = record["data"]
        return self.assessment_id

    def complete(self) -> AssessmentStatus:
        record = self.service.complete_assessment(self.assessment_id, self.context)
        if record is None:
            raise LookupError(f"Assessment {self.assessment_id} no longer exists.")
        self.status = AssessmentStatus(record["status"])
        return self.status
