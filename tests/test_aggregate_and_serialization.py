# /tests/test_aggregate_and_serialization.py

import json
import logging
from datetime import date, datetime

import pytest

from psyassist.core.exceptions import ScoreValidationError
from psyassist.models.assessment_model import AssessmentData, Domain, ScaleType
from psyassist.services.assessment_helpers import aggregate
from psyassist.services.assessment_helpers.serialization import dump_assessment_data, load_assessment_data

# --- Test Data Fixtures ---

@pytest.fixture
def data():
    """A fresh aggregate with the starter recommendations."""
    return aggregate.new_assessment_data()


@pytest.fixture
def filled_data(data):
    """An aggregate with one of everything, built through the editing operations."""
    score = aggregate.add_score(data, "WISC-V", 78, "S100", subtest="Working Memory", notes="below average")
    aggregate.add_score(data, "NEPSY-II", 12, "S10", subtest="Design Copying")
    aggregate.mark_domain_strength(data, score.id, Domain.COGNITIVE, False)
    aggregate.add_observation(data, "Child cooperated well", now=datetime(2024, 1, 20, 10, 30))
    aggregate.toggle_recommendation(data, "1")
    aggregate.add_custom_recommendation(data, "Weekly check-in with the counselor")
    aggregate.add_xba_test(data, "gwm", source_score_id=score.id)
    aggregate.add_xba_test(data, "gs", source_score_id=score.id)
    aggregate.add_xba_test(data, "gv", tool="VMI", subtest="Visual Perception", standard_score=92, scale_type="S100")
    aggregate.set_passage(data, "gwm", ["gwm_1", "gwm_4"], "Improved with visual cues.")
    data.referralReason = "Learning and attention difficulties"
    data.assessmentDate = date(2024, 1, 20)
    return data

# --- Aggregate Editing ---

def test_new_assessment_starts_with_ten_unselected_recommendations(data):
    assert len(data.recommendations) == 10
    assert not any(rec.selected for rec in data.recommendations)
    assert data.recommendations[0].title == "Extra time on tests"


def test_add_score_rejects_out_of_range_without_mutation(data):
    with pytest.raises(ScoreValidationError):
        aggregate.add_score(data, "WISC-V", 170, "S100")
    with pytest.raises(ScoreValidationError):
        aggregate.add_score(data, "WISC-V", 100, "IQ")
    with pytest.raises(ValueError):
        aggregate.add_score(data, "   ", 100, "S100")
    assert data.scores == []


def test_add_score_accepts_boundary_value(data):
    score = aggregate.add_score(data, "WISC-V", 160, "S100")
    assert score.scaleType == ScaleType.S100
    assert data.scores == [score]


def test_observation_timestamp_and_blank_rejection(data):
    observation = aggregate.add_observation(data, "Needed frequent breaks", now=datetime(2024, 1, 20, 11, 15))
    assert observation.timestamp == "20/01/2024 11:15"
    with pytest.raises(ValueError):
        aggregate.add_observation(data, "  ")
    assert len(data.observations) == 1


def test_toggle_and_custom_recommendations(data):
    aggregate.toggle_recommendation(data, "3")
    custom = aggregate.add_custom_recommendation(data, "Tutoring in mathematics")
    assert custom.selected is True
    titles = [rec.title for rec in aggregate.selected_recommendations(data)]
    assert titles == ["Splitting assignments into short segments", "Tutoring in mathematics"]

    aggregate.toggle_recommendation(data, "3")
    assert [rec.title for rec in aggregate.selected_recommendations(data)] == ["Tutoring in mathematics"]

    with pytest.raises(ValueError):
        aggregate.toggle_recommendation(data, "no-such-id")


def test_xba_rules(data):
    score = aggregate.add_score(data, "WISC-V", 95, "S100")
    with pytest.raises(ValueError):
        aggregate.add_xba_test(data, "gx", source_score_id=score.id)
    with pytest.raises(ValueError):
        aggregate.add_xba_test(data, "gf", source_score_id="sc_missing")
    with pytest.raises(ScoreValidationError):
        aggregate.add_xba_test(data, "gf", tool="WJ-IV", standard_score=2, scale_type="S100")
    with pytest.raises(ValueError):
        aggregate.add_xba_test(data, "gf", tool="WJ-IV")
    assert data.xbaTests == []


def test_set_passage_replaces_previous_passage_of_same_ability(data):
    aggregate.set_passage(data, "gc", ["gc_1"])
    passage = aggregate.set_passage(data, "gc", ["gc_2", "gc_1"], "")
    assert len(data.chcPassages) == 1
    assert passage.generatedText == (
        "The child expressed ideas verbally with rich and precise language. "
        "Vocabulary and general knowledge were within the average range."
    )

# --- Serialization ---

def test_round_trip_preserves_everything(filled_data):
    blob = dump_assessment_data(filled_data)
    # The blob must survive a JSON round trip, as it would in a JSON column.
    restored = load_assessment_data(json.loads(json.dumps(blob)))

    assert restored.scores == filled_data.scores
    assert restored.observations == filled_data.observations
    assert restored.xbaTests == filled_data.xbaTests
    assert restored.chcPassages == filled_data.chcPassages
    assert aggregate.selected_recommendations(restored) == aggregate.selected_recommendations(filled_data)
    assert restored.assessmentDate == date(2024, 1, 20)
    assert [s.tool for s in restored.scores] == ["WISC-V", "NEPSY-II"]


@pytest.mark.parametrize("raw", [None, "", "not json", "[1, 2]", 42, []])
def test_load_tolerates_missing_or_malformed_blob(raw):
    restored = load_assessment_data(raw)
    assert restored == AssessmentData()


def test_load_accepts_blob_stored_as_json_string(filled_data):
    restored = load_assessment_data(json.dumps(dump_assessment_data(filled_data)))
    assert restored.scores == filled_data.scores


def test_load_resets_only_the_malformed_fields(filled_data, caplog):
    blob = dump_assessment_data(filled_data)
    blob["scores"] = [{"tool": "WISC-V"}]            # missing standardScore/scaleType
    blob["observations"] = "not a list"
    with caplog.at_level(logging.WARNING):
        restored = load_assessment_data(blob, "asm_test")

    assert restored.scores == []
    assert restored.observations == []
    assert restored.xbaTests == filled_data.xbaTests
    assert restored.recommendations == filled_data.recommendations
    assert "scores" in caplog.text


def test_load_upgrades_first_revision_blob():
    """Blobs written before XBA tests, passages and domain tags existed."""
    legacy = {
        "scores": [{"id": "1700000000000", "tool": "WISC-V", "subtest": "Verbal Comprehension",
                    "standardScore": 95, "scaleType": "S100", "notes": ""}],
        "observations": [{"id": "1700000000001", "content": "Calm", "timestamp": "20/01/2024 10:00"}],
        "recommendations": [{"id": "1", "title": "Extra time on tests", "selected": True}],
    }
    restored = load_assessment_data(legacy)
    assert restored.schemaVersion == 2
    assert restored.scores[0].domain is None
    assert restored.xbaTests == []
    assert restored.chcPassages == []
