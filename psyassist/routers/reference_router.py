# /psyassist/routers/reference_router.py

from typing import List

from fastapi import APIRouter, HTTPException, status

from ..models import assessment_model, reference_model
from ..services import reference_service

router = APIRouter()


@router.get("/chc-abilities", response_model=List[reference_model.CHCAbility], summary="List the CHC Broad Abilities")
def get_chc_abilities():
    return reference_service.list_chc_abilities()


@router.get("/sentence-bank/{ability_id}", response_model=reference_model.SentenceBankResponse, summary="Get the Passage Sentences of an Ability")
def get_sentence_bank(ability_id: str):
    bank = reference_service.get_sentence_bank(ability_id)
    if bank is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"CHC ability {ability_id} not found")
    return bank


@router.get("/diagnostic-tools", response_model=List[str], summary="List Suggested Diagnostic Tools")
def get_diagnostic_tools():
    return reference_service.list_diagnostic_tools()


@router.get("/recommendations", response_model=List[assessment_model.Recommendation], summary="List the Starter Recommendations")
def get_starter_recommendations():
    return reference_service.list_starter_recommendations()


@router.get("/score-band", response_model=reference_model.ScoreBand, summary="Check and Interpret a Score")
def get_score_band(score: float, scale_type: str):
    return reference_service.describe_score(score, scale_type)
