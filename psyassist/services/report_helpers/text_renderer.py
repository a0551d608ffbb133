# /psyassist/services/report_helpers/text_renderer.py

"""
Renders a report snapshot into the flat text document users download.

Section order is fixed: header, child identity, scores, observations,
recommendations, signature.
"""

from datetime import date
from typing import List, Optional

from ...models.assessment_model import AssessmentData
from ..assessment_helpers.aggregate import selected_recommendations

REPORT_TITLE = "Psychological Assessment Report"
DATE_FORMAT = "%d/%m/%Y"


def format_score_value(value: float) -> str:
    """78.0 -> '78', 1.5 -> '1.5'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else "-"


def score_line(tool: str, subtest: str, standard_score: float, scale_type: str) -> str:
    """'<tool> - <subtest>: <score> (<scale>)', or '<tool>: <score> (<scale>)' without a subtest."""
    label = f"{tool} - {subtest}" if subtest and subtest.strip() else tool
    return f"{label}: {format_score_value(standard_score)} ({scale_type})"


def render_report_text(
    child_name: str,
    date_of_birth: date,
    age: int,
    data: AssessmentData,
    psychologist: str,
    generated_on: date,
) -> str:
    lines: List[str] = [
        REPORT_TITLE,
        "=" * len(REPORT_TITLE),
        f"Assessment date: {_format_date(data.assessmentDate)}",
        f"Referral reason: {data.referralReason or '-'}",
        "",
        "Child Information",
        f"Name: {child_name}",
        f"Date of birth: {_format_date(date_of_birth)}",
        f"Age: {age}",
        "",
        "Assessment Results",
    ]
    lines.extend(score_line(s.tool, s.subtest, s.standardScore, s.scaleType.value) for s in data.scores)

    lines += ["", "Observations"]
    lines.extend(observation.content for observation in data.observations)

    lines += ["", "Recommendations"]
    lines.extend(f"- {rec.title}" for rec in selected_recommendations(data))

    lines += [
        "",
        "Signature",
        f"Psychologist: {psychologist or '-'}",
        f"Date: {_format_date(generated_on)}",
    ]
    return "\n".join(lines) + "\n"
