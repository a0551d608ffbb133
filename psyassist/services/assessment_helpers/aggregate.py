# /psyassist/services/assessment_helpers/aggregate.py

"""
Editing operations on an in-memory `AssessmentData` aggregate.

These mirror the actions of the assessment form: adding a score, logging an
observation, toggling a recommendation and so on. Each one validates its input
first and raises `ValueError` (or a subclass) before touching the aggregate,
so a rejected action leaves the aggregate unchanged.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from ...core import chc_catalog
from ...core.assessment_catalog import STARTER_RECOMMENDATIONS
from ...models.assessment_model import (
    AssessmentData, CHCPassage, Domain, Observation, Recommendation, ScaleType, Score, XBATest,
)
from .passage_composer import compose_passage
from .scoring import validate_score

OBSERVATION_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"


def new_assessment_data() -> AssessmentData:
    """A fresh aggregate, pre-filled with the unselected starter recommendations."""
    return AssessmentData(
        recommendations=[Recommendation(id=rec["id"], title=rec["title"]) for rec in STARTER_RECOMMENDATIONS]
    )


def add_score(
    data: AssessmentData,
    tool: str,
    standard_score: float,
    scale_type: str,
    subtest: str = "",
    notes: str = "",
) -> Score:
    tool = (tool or "").strip()
    if not tool:
        raise ValueError("A diagnostic tool is required.")
    validate_score(standard_score, scale_type)

    score = Score(
        tool=tool,
        subtest=(subtest or "").strip(),
        standardScore=standard_score,
        scaleType=ScaleType(scale_type),
        notes=notes or "",
    )
    data.scores.append(score)
    return score


def _score_value(score) -> tuple:
    return (score.standardScore, score.scaleType)


def validate_new_scores(stored: AssessmentData, incoming: AssessmentData) -> None:
    """
    Range-checks the scores of `incoming` that are new or whose value changed.

    Score values cannot be edited, so a stored id with a different score or
    scale type is checked like a new score. Untouched scores are taken as
    they are.
    """
    known = {score.id: _score_value(score) for score in stored.scores}
    for score in incoming.scores:
        if known.get(score.id) != _score_value(score):
            validate_score(score.standardScore, score.scaleType)


def validate_new_xba_tests(stored: AssessmentData, incoming: AssessmentData) -> None:
    """
    Checks the XBA tests of `incoming` that are new or changed against the
    rules `add_xba_test` applies. Every source score reference must resolve
    against the incoming scores, including references that did not change.
    """
    score_ids = {score.id for score in incoming.scores}
    known = {xba_test.id: xba_test for xba_test in stored.xbaTests}
    for xba_test in incoming.xbaTests:
        if xba_test.sourceScoreId:
            if xba_test.sourceScoreId not in score_ids:
                raise ValueError(f"Score {xba_test.sourceScoreId} not found.")
        if known.get(xba_test.id) == xba_test:
            continue
        _require_ability(xba_test.abilityId)
        if not xba_test.sourceScoreId:
            validate_score(xba_test.standardScore, xba_test.scaleType)


def add_observation(data: AssessmentData, content: str, now: Optional[datetime] = None) -> Observation:
    if not content or not content.strip():
        raise ValueError("Observation content is required.")
    observation = Observation(
        content=content,
        timestamp=(now or datetime.now()).strftime(OBSERVATION_TIMESTAMP_FORMAT),
    )
    data.observations.append(observation)
    return observation


def _find_recommendation(data: AssessmentData, recommendation_id: str) -> Recommendation:
    for rec in data.recommendations:
        if rec.id == recommendation_id:
            return rec
    raise ValueError(f"Recommendation {recommendation_id} not found.")


def toggle_recommendation(data: AssessmentData, recommendation_id: str) -> Recommendation:
    rec = _find_recommendation(data, recommendation_id)
    rec.selected = not rec.selected
    return rec


def add_custom_recommendation(data: AssessmentData, title: str) -> Recommendation:
    if not title or not title.strip():
        raise ValueError("Recommendation title is required.")
    rec = Recommendation(title=title.strip(), selected=True)
    data.recommendations.append(rec)
    return rec


def selected_recommendations(data: AssessmentData) -> List[Recommendation]:
    return [rec for rec in data.recommendations if rec.selected]


def _find_score(data: AssessmentData, score_id: str) -> Optional[Score]:
    return next((score for score in data.scores if score.id == score_id), None)


def mark_domain_strength(data: AssessmentData, score_id: str, domain: Domain, is_strength: bool) -> Score:
    score = _find_score(data, score_id)
    if score is None:
        raise ValueError(f"Score {score_id} not found.")
    score.domain = Domain(domain)
    score.strength = is_strength
    return score


def _require_ability(ability_id: str) -> None:
    if chc_catalog.get_ability(ability_id) is None:
        raise ValueError(f"Unknown CHC ability: {ability_id}")


def add_xba_test(
    data: AssessmentData,
    ability_id: str,
    source_score_id: Optional[str] = None,
    tool: Optional[str] = None,
    subtest: Optional[str] = None,
    standard_score: Optional[float] = None,
    scale_type: Optional[str] = None,
) -> XBATest:
    """
    Maps a test result onto a CHC ability.

    With `source_score_id` the entry references an existing score (the same
    score may back several entries). Otherwise tool, score and scale type
    describe an independent test, validated like any new score.
    """
    _require_ability(ability_id)

    if source_score_id:
        if _find_score(data, source_score_id) is None:
            raise ValueError(f"Score {source_score_id} not found.")
        xba_test = XBATest(abilityId=ability_id, sourceScoreId=source_score_id)
    else:
        if not tool or not tool.strip() or standard_score is None or not scale_type:
            raise ValueError("An XBA test needs either a source score or a tool, score and scale type.")
        validate_score(standard_score, scale_type)
        xba_test = XBATest(
            abilityId=ability_id,
            tool=tool.strip(),
            subtest=(subtest or "").strip(),
            standardScore=standard_score,
            scaleType=ScaleType(scale_type),
        )

    data.xbaTests.append(xba_test)
    return xba_test


def set_passage(
    data: AssessmentData,
    ability_id: str,
    sentence_ids: Iterable[str],
    custom_text: str = "",
) -> CHCPassage:
    """Stores (replacing any previous one) the passage of one ability and regenerates its text."""
    _require_ability(ability_id)
    sentence_ids = list(sentence_ids)
    passage = CHCPassage(
        abilityId=ability_id,
        selectedSentenceIds=sentence_ids,
        customText=custom_text or "",
        generatedText=compose_passage(sentence_ids, chc_catalog.get_sentence_bank(ability_id), custom_text),
    )
    data.chcPassages = [p for p in data.chcPassages if p.abilityId != ability_id] + [passage]
    return passage


def regenerate_passages(data: AssessmentData) -> None:
    """Recomposes every passage's text from its own sentence ids and custom text."""
    for passage in data.chcPassages:
        passage.generatedText = compose_passage(
            passage.selectedSentenceIds,
            chc_catalog.get_sentence_bank(passage.abilityId),
            passage.customText,
        )
