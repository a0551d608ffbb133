# /tests/test_assessment_service.py

from datetime import date

import pytest

from psyassist.core.exceptions import AssessmentNotSavedError, ScoreValidationError
from psyassist.models.assessment_model import AssessmentData, AssessmentStatus, Domain, Score, ScaleType, XBATest
from psyassist.services.assessment_helpers import aggregate
from psyassist.services.assessment_helpers.editing_session import AssessmentEditingSession
from psyassist.services.assessment_service import AssessmentService

# --- Test Data Fixtures ---

@pytest.fixture
def service(db_service):
    return AssessmentService(db=db_service)


@pytest.fixture
def child(db_service, context):
    return db_service.add_child({
        "name": "Sara Cohen",
        "date_of_birth": date(2015, 3, 15),
        "user_id": context.user_id,
    })


@pytest.fixture
def saved(service, context, child):
    """A saved assessment with a single score."""
    data = aggregate.new_assessment_data()
    aggregate.add_score(data, "WISC-V", 78, "S100", subtest="Working Memory")
    return service.save_assessment(context, data, child_id=child.id)

# --- Save / Load ---

def test_first_save_creates_in_progress_record(saved, child):
    assert saved["id"].startswith("asm_")
    assert saved["status"] == AssessmentStatus.IN_PROGRESS.value
    assert saved["childId"] == child.id
    assert saved["childName"] == "Sara Cohen"
    assert saved["data"].scores[0].standardScore == 78


def test_second_save_updates_the_same_record(service, context, saved):
    data = saved["data"]
    aggregate.add_observation(data, "Child cooperated well")
    updated = service.save_assessment(context, data, assessment_id=saved["id"])

    assert updated["id"] == saved["id"]
    assert len(service.list_assessments(context)) == 1
    loaded = service.load_assessment(saved["id"], context)
    assert [o.content for o in loaded["data"].observations] == ["Child cooperated well"]


def test_save_requires_an_existing_child(service, context):
    with pytest.raises(ValueError):
        service.save_assessment(context, AssessmentData())
    with pytest.raises(LookupError):
        service.save_assessment(context, AssessmentData(), child_id="chd_missing")
    assert service.list_assessments(context) == []


def test_save_rejects_new_out_of_range_score_and_writes_nothing(service, context, saved):
    data = saved["data"]
    # Bypass the editing helper to simulate a client sending a bad new score.
    data.scores.append(Score(tool="WISC-V", subtest="Processing Speed", standardScore=200, scaleType=ScaleType.S100))

    with pytest.raises(ScoreValidationError) as excinfo:
        service.save_assessment(context, data, assessment_id=saved["id"])
    assert "S100" in str(excinfo.value)

    loaded = service.load_assessment(saved["id"], context)
    assert len(loaded["data"].scores) == 1


def test_save_rechecks_a_score_whose_value_changed(service, context, saved):
    data = saved["data"]
    data.scores[0].standardScore = 999

    with pytest.raises(ScoreValidationError):
        service.save_assessment(context, data, assessment_id=saved["id"])
    loaded = service.load_assessment(saved["id"], context)
    assert loaded["data"].scores[0].standardScore == 78

    # Switching the scale type of a stored score is a change too.
    data = loaded["data"]
    data.scores[0].scaleType = ScaleType.Z
    with pytest.raises(ScoreValidationError):
        service.save_assessment(context, data, assessment_id=saved["id"])


@pytest.mark.parametrize("xba_test, error", [
    (XBATest(abilityId="nope", tool="WJ-IV", standardScore=95, scaleType=ScaleType.S100), ValueError),
    (XBATest(abilityId="gf", tool="WJ-IV", standardScore=999, scaleType=ScaleType.S100), ScoreValidationError),
    (XBATest(abilityId="gf", sourceScoreId="sc_dangling"), ValueError),
])
def test_save_rejects_invalid_xba_tests(service, context, saved, xba_test, error):
    data = saved["data"]
    data.xbaTests.append(xba_test)

    with pytest.raises(error):
        service.save_assessment(context, data, assessment_id=saved["id"])
    assert service.load_assessment(saved["id"], context)["data"].xbaTests == []


def test_first_save_rejects_invalid_xba_tests(service, context, child):
    data = aggregate.new_assessment_data()
    data.xbaTests.append(XBATest(abilityId="gf", sourceScoreId="sc_dangling"))

    with pytest.raises(ValueError):
        service.save_assessment(context, data, child_id=child.id)
    assert service.list_assessments(context) == []


def test_save_rejects_removing_a_referenced_score(service, context, saved):
    data = saved["data"]
    aggregate.add_xba_test(data, "gwm", source_score_id=data.scores[0].id)
    saved = service.save_assessment(context, data, assessment_id=saved["id"])

    data = saved["data"]
    data.scores = []
    with pytest.raises(ValueError):
        service.save_assessment(context, data, assessment_id=saved["id"])


def test_save_accepts_valid_xba_tests(service, context, saved):
    data = saved["data"]
    data.xbaTests.append(XBATest(abilityId="gwm", sourceScoreId=data.scores[0].id))
    data.xbaTests.append(XBATest(abilityId="gv", tool="VMI", standardScore=92, scaleType=ScaleType.S100))

    updated = service.save_assessment(context, data, assessment_id=saved["id"])
    assert [x.abilityId for x in updated["data"].xbaTests] == ["gwm", "gv"]


def test_save_on_unknown_id_returns_none(service, context):
    assert service.save_assessment(context, AssessmentData(), assessment_id="asm_missing") is None


def test_save_does_not_touch_the_status(service, context, saved):
    service.complete_assessment(saved["id"], context)
    data = saved["data"]
    data.referralReason = "Attention difficulties"
    updated = service.save_assessment(context, data, assessment_id=saved["id"])
    assert updated["status"] == AssessmentStatus.COMPLETED.value
    assert updated["data"].referralReason == "Attention difficulties"


def test_save_regenerates_passage_text(service, context, saved):
    data = saved["data"]
    aggregate.set_passage(data, "gf", ["gf_1"])
    data.chcPassages[0].generatedText = "stale text"
    updated = service.save_assessment(context, data, assessment_id=saved["id"])
    assert updated["data"].chcPassages[0].generatedText != "stale text"
    assert updated["data"].chcPassages[0].generatedText.endswith(".")

# --- Status ---

def test_complete_before_save_raises(service, context):
    with pytest.raises(AssessmentNotSavedError):
        service.complete_assessment(None, context)


def test_complete_is_idempotent(service, context, saved):
    first = service.complete_assessment(saved["id"], context)
    second = service.complete_assessment(saved["id"], context)
    assert first["status"] == second["status"] == AssessmentStatus.COMPLETED.value


def test_complete_unknown_assessment_returns_none(service, context):
    assert service.complete_assessment("asm_missing", context) is None

# --- Isolation & Deletion ---

def test_assessments_are_invisible_to_other_users(service, context, other_context, saved):
    assert service.load_assessment(saved["id"], other_context) is None
    assert service.list_assessments(other_context) == []
    assert service.complete_assessment(saved["id"], other_context) is None
    assert service.delete_assessment(saved["id"], other_context) is False
    assert service.load_assessment(saved["id"], context) is not None


def test_other_user_cannot_create_for_foreign_child(service, other_context, child):
    with pytest.raises(LookupError):
        service.save_assessment(other_context, AssessmentData(), child_id=child.id)


def test_list_can_be_filtered_by_child(service, context, db_service, saved):
    other_child = db_service.add_child({"name": "Noam Levi", "date_of_birth": date(2014, 6, 1), "user_id": context.user_id})
    service.save_assessment(context, AssessmentData(), child_id=other_child.id)

    assert len(service.list_assessments(context)) == 2
    only_noam = service.list_assessments(context, child_id=other_child.id)
    assert [a["childName"] for a in only_noam] == ["Noam Levi"]


def test_delete_assessment(service, context, saved):
    assert service.delete_assessment(saved["id"], context) is True
    assert service.load_assessment(saved["id"], context) is None

# --- Editing Session ---

def test_editing_session_reuses_its_id(service, context, child):
    session = AssessmentEditingSession(service, context, child_id=child.id)
    session.add_score("WISC-V", 95, "S100", subtest="Verbal Comprehension")
    first_id = session.save()

    session.add_observation("Needed frequent breaks")
    second_id = session.save()

    assert first_id == second_id
    assert len(service.list_assessments(context)) == 1
    assert session.status == AssessmentStatus.IN_PROGRESS


def test_editing_session_failed_save_keeps_state(service, context, child):
    session = AssessmentEditingSession(service, context, child_id=child.id)
    session.save()
    saved_id = session.assessment_id

    session.data.scores.append(Score(tool="NEPSY-II", standardScore=25, scaleType=ScaleType.S10))
    with pytest.raises(ScoreValidationError):
        session.save()
    assert session.assessment_id == saved_id
    assert len(session.data.scores) == 1


def test_editing_session_complete_requires_a_save(service, context, child):
    session = AssessmentEditingSession(service, context, child_id=child.id)
    with pytest.raises(AssessmentNotSavedError):
        session.complete()
    session.save()
    assert session.complete() == AssessmentStatus.COMPLETED


def test_resumed_session_edits_the_stored_aggregate(service, context, saved):
    session = AssessmentEditingSession.resume(service, context, saved["id"])
    score_id = session.data.scores[0].id
    session.mark_domain_strength(score_id, Domain.COGNITIVE, False)
    session.add_xba_test("gwm", source_score_id=score_id)
    session.toggle_recommendation("1")
    session.save()

    loaded = service.load_assessment(saved["id"], context)["data"]
    assert loaded.scores[0].domain == Domain.COGNITIVE
    assert loaded.scores[0].strength is False
    assert loaded.xbaTests[0].sourceScoreId == score_id
    assert [r.title for r in aggregate.selected_recommendations(loaded)] == ["Extra time on tests"]

    assert AssessmentEditingSession.resume(service, context, "asm_missing") is None
    print("\n✅ SUCCESS: resumed editing session persisted all edits.")
