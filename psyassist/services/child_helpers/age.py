# /psyassist/services/child_helpers/age.py

from datetime import date, datetime
from typing import Optional, Union


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def age_in_years(birth_date: Union[date, datetime], as_of: Optional[Union[date, datetime]] = None) -> int:
    """
    Number of completed birthdays between `birth_date` and `as_of` (today by default).

    The birthday comparison is a plain (month, day) comparison, so a Feb 29
    birthday counts as reached on Mar 1 in non-leap years. A birth date after
    `as_of` gives 0.
    """
    birth = _as_date(birth_date)
    reference = _as_date(as_of) if as_of is not None else date.today()

    age = reference.year - birth.year
    if (reference.month, reference.day) < (birth.month, birth.day):
        age -= 1
    return max(age, 0)
