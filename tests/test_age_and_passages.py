# /tests/test_age_and_passages.py

from datetime import date, datetime

import pytest

from psyassist.services.assessment_helpers.passage_composer import compose_passage
from psyassist.services.child_helpers.age import age_in_years

# --- Age Calculator ---

@pytest.mark.parametrize("birth, as_of, expected", [
    (date(2015, 3, 15), date(2024, 1, 20), 8),   # birthday not yet reached
    (date(2015, 3, 15), date(2024, 4, 1), 9),
    (date(2015, 3, 15), date(2024, 3, 15), 9),   # on the birthday
    (date(2015, 3, 15), date(2024, 3, 14), 8),
    (date(2024, 1, 10), date(2024, 6, 1), 0),    # born this year
    (date(2016, 2, 29), date(2023, 2, 28), 6),   # leap-day birthday, non-leap year
    (date(2016, 2, 29), date(2023, 3, 1), 7),
    (date(2016, 2, 29), date(2024, 2, 29), 8),
])
def test_age_in_years(birth, as_of, expected):
    assert age_in_years(birth, as_of) == expected


def test_age_in_years_accepts_datetimes_and_never_goes_negative():
    assert age_in_years(datetime(2015, 3, 15, 9, 0), datetime(2024, 4, 1, 8, 0)) == 9
    assert age_in_years(date(2030, 1, 1), date(2024, 1, 1)) == 0


def test_age_in_years_defaults_to_today():
    today = date.today()
    assert age_in_years(date(today.year - 5, 1, 1)) in (4, 5)

# --- Ability-Passage Composer ---

def test_compose_passage_empty_inputs():
    assert compose_passage([], {}, "") == ""


def test_compose_passage_adds_trailing_period():
    assert compose_passage(["id1"], {"id1": "Text one"}, "") == "Text one."


def test_compose_passage_appends_custom_text():
    assert compose_passage(["id1"], {"id1": "Text one."}, "extra") == "Text one. extra"


def test_compose_passage_keeps_order_and_drops_unknown_ids():
    bank = {"a": "First", "b": "Second.", "c": "Third"}
    assert compose_passage(["c", "missing", "a", "b"], bank) == "Third. First. Second."


def test_compose_passage_custom_text_only():
    assert compose_passage([], {"a": "First"}, "  Free text.  ") == "Free text."


def test_compose_passage_is_pure_and_idempotent():
    ids = ["a", "b"]
    bank = {"a": "First", "b": "Second"}
    first = compose_passage(ids, bank, "note")
    second = compose_passage(ids, bank, "note")
    assert first == second == "First. Second. note"
    assert ids == ["a", "b"]
    assert bank == {"a": "First", "b": "Second"}
