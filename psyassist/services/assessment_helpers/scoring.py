# /psyassist/services/assessment_helpers/scoring.py

"""
Score rules: the permissible range of each scale type and the qualitative
band a score falls into.

Both functions accept the scale type as an enum member or its plain string
tag, and both fail closed on an unknown tag.
"""

import math
from typing import Dict, List, Tuple, Union

from ...core.exceptions import ScoreValidationError
from ...models.assessment_model import ScaleType

UNKNOWN_BAND = "unknown"

# Inclusive (min, max) per scale type.
SCORE_RANGES: Dict[str, Tuple[float, float]] = {
    ScaleType.Z.value: (-4, 4),
    ScaleType.S10.value: (1, 19),
    ScaleType.S100.value: (40, 160),
}

# (inclusive lower bound, band) in descending order; anything below the last
# bound is "very low". "average" starts at -1 SD and "low" at -2 SD on every
# scale (S100: mean 100, SD 15; S10: mean 10, SD 3).
BAND_THRESHOLDS: Dict[str, List[Tuple[float, str]]] = {
    ScaleType.S100.value: [(115, "very high"), (110, "high"), (85, "average"), (70, "low")],
    ScaleType.S10.value: [(13, "very high"), (11, "high"), (7, "average"), (4, "low")],
    ScaleType.Z.value: [(1.5, "very high"), (1, "high"), (-1, "average"), (-2, "low")],
}


def _scale_tag(scale_type: Union[ScaleType, str, None]) -> str:
    if isinstance(scale_type, ScaleType):
        return scale_type.value
    return str(scale_type) if scale_type is not None else ""


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def is_valid_score(value: float, scale_type: Union[ScaleType, str]) -> bool:
    bounds = SCORE_RANGES.get(_scale_tag(scale_type))
    if bounds is None or not _is_number(value):
        return False
    low, high = bounds
    return low <= value <= high


def validate_score(value: float, scale_type: Union[ScaleType, str]) -> None:
    """Raises ScoreValidationError naming the scale when the score is out of range."""
    if not is_valid_score(value, scale_type):
        raise ScoreValidationError(_scale_tag(scale_type))


def interpret_score(score: float, scale_type: Union[ScaleType, str]) -> str:
    thresholds = BAND_THRESHOLDS.get(_scale_tag(scale_type))
    if thresholds is None or not _is_number(score):
        return UNKNOWN_BAND
    for lower_bound, band in thresholds:
        if score >= lower_bound:
            return band
    return "very low"
