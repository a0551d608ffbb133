# /psyassist/models/reference_model.py

from typing import List

from pydantic import BaseModel


class CHCAbility(BaseModel):
    id: str
    code: str
    name: str
    localizedName: str
    description: str


class SentenceOption(BaseModel):
    id: str
    text: str


class SentenceBankResponse(BaseModel):
    abilityId: str
    sentences: List[SentenceOption]


class ScoreBand(BaseModel):
    score: float
    scaleType: str
    valid: bool
    band: str
