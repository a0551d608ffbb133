# /psyassist/services/report_helpers/findings.py

from typing import Dict, Iterable, List, Tuple

from ...models.assessment_model import Domain, Score


def group_findings_by_domain(scores: Iterable[Score]) -> Tuple[Dict[str, List[Score]], Dict[str, List[Score]]]:
    """
    Splits domain-tagged scores into strengths and weaknesses per domain.

    Untagged scores are left out. A tagged score that is not explicitly a
    strength counts as a weakness.
    """
    strengths = {domain.value: [] for domain in Domain}
    weaknesses = {domain.value: [] for domain in Domain}
    for score in scores:
        if score.domain is None:
            continue
        target = strengths if score.strength else weaknesses
        target[score.domain.value].append(score)
    return strengths, weaknesses
