# /psyassist/services/reference_service.py

"""
Read-only reference data served to the assessment form: CHC abilities and
their sentence banks, suggested tools, starter recommendations, and a score
band lookup for live feedback while a score is typed in.
"""

from typing import Dict, List, Optional

from ..core import chc_catalog
from ..core.assessment_catalog import DIAGNOSTIC_TOOLS, STARTER_RECOMMENDATIONS
from .assessment_helpers.scoring import interpret_score, is_valid_score


def list_chc_abilities() -> List[Dict[str, str]]:
    return [dict(ability) for ability in chc_catalog.CHC_ABILITIES]


def get_sentence_bank(ability_id: str) -> Optional[Dict]:
    if chc_catalog.get_ability(ability_id) is None:
        return None
    bank = chc_catalog.get_sentence_bank(ability_id)
    return {
        "abilityId": ability_id,
        "sentences": [{"id": sentence_id, "text": text} for sentence_id, text in bank.items()],
    }


def list_diagnostic_tools() -> List[str]:
    return list(DIAGNOSTIC_TOOLS)


def list_starter_recommendations() -> List[Dict]:
    return [{**rec, "selected": False} for rec in STARTER_RECOMMENDATIONS]


def describe_score(score: float, scale_type: str) -> Dict:
    return {
        "score": score,
        "scaleType": scale_type,
        "valid": is_valid_score(score, scale_type),
        "band": interpret_score(score, scale_type),
    }
