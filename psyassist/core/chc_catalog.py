# /psyassist/core/chc_catalog.py

"""
Static reference data for the Cattell-Horn-Carroll (CHC) broad abilities and
the canned sentences used to write one passage per ability.

This is immutable reference data: it is never stored per assessment. Passages
store sentence ids only and are resolved against this bank when composed.
"""

from typing import Dict, List, Optional

CHC_ABILITIES: List[Dict[str, str]] = [
    {
        "id": "gf",
        "code": "Gf",
        "name": "Fluid Reasoning",
        "localizedName": "חשיבה פלואידית",
        "description": "Solving novel problems, forming concepts and drawing inferences without relying on learned knowledge.",
    },
    {
        "id": "gc",
        "code": "Gc",
        "name": "Comprehension-Knowledge",
        "localizedName": "ידע מגובש",
        "description": "Breadth and depth of acquired knowledge, vocabulary and verbal comprehension.",
    },
    {
        "id": "gwm",
        "code": "Gwm",
        "name": "Working Memory",
        "localizedName": "זיכרון עבודה",
        "description": "Holding and manipulating information in immediate awareness.",
    },
    {
        "id": "gv",
        "code": "Gv",
        "name": "Visual Processing",
        "localizedName": "עיבוד חזותי",
        "description": "Perceiving, analyzing and mentally manipulating visual patterns and images.",
    },
    {
        "id": "ga",
        "code": "Ga",
        "name": "Auditory Processing",
        "localizedName": "עיבוד שמיעתי",
        "description": "Perceiving and discriminating sounds, including phonological awareness.",
    },
    {
        "id": "glr",
        "code": "Glr",
        "name": "Long-Term Storage and Retrieval",
        "localizedName": "אחסון ושליפה מזיכרון ארוך טווח",
        "description": "Storing information and fluently retrieving it later.",
    },
    {
        "id": "gs",
        "code": "Gs",
        "name": "Processing Speed",
        "localizedName": "מהירות עיבוד",
        "description": "Performing simple, overlearned cognitive tasks quickly and accurately.",
    },
    {
        "id": "gq",
        "code": "Gq",
        "name": "Quantitative Knowledge",
        "localizedName": "ידע כמותי",
        "description": "Acquired mathematical knowledge and quantitative reasoning.",
    },
    {
        "id": "grw",
        "code": "Grw",
        "name": "Reading and Writing",
        "localizedName": "קריאה וכתיבה",
        "description": "Acquired reading decoding, reading comprehension and written expression skills.",
    },
]

_ABILITIES_BY_ID = {ability["id"]: ability for ability in CHC_ABILITIES}


SENTENCE_BANK: Dict[str, Dict[str, str]] = {
    "gf": {
        "gf_1": "The child solved novel problems at a level expected for their age",
        "gf_2": "The child had difficulty identifying rules and patterns in unfamiliar material",
        "gf_3": "Inductive reasoning was a relative strength",
        "gf_4": "The child benefited from worked examples before attempting new tasks",
    },
    "gc": {
        "gc_1": "Vocabulary and general knowledge were within the average range",
        "gc_2": "The child expressed ideas verbally with rich and precise language",
        "gc_3": "Word knowledge was limited relative to same-age peers",
        "gc_4": "Verbal comprehension supported performance on other tasks",
    },
    "gwm": {
        "gwm_1": "The child had difficulty holding several pieces of information in mind at once",
        "gwm_2": "Performance declined as the amount of information to be held increased",
        "gwm_3": "Auditory working memory was a relative strength",
        "gwm_4": "Multi-step instructions needed to be repeated",
    },
    "gv": {
        "gv_1": "Visual-spatial reasoning was within the average range",
        "gv_2": "The child reproduced complex figures accurately",
        "gv_3": "The child had difficulty mentally rotating and manipulating shapes",
    },
    "ga": {
        "ga_1": "Phonological awareness was within the average range",
        "ga_2": "The child had difficulty segmenting and blending sounds",
        "ga_3": "Sound discrimination was accurate in a quiet environment",
    },
    "glr": {
        "glr_1": "The child learned new associations efficiently",
        "glr_2": "Retrieval of learned information was slow and effortful",
        "glr_3": "Naming facility was within the average range",
    },
    "gs": {
        "gs_1": "The child worked slowly on simple timed tasks",
        "gs_2": "Processing speed was within the average range",
        "gs_3": "Speed came at the cost of accuracy on clerical tasks",
    },
    "gq": {
        "gq_1": "Basic arithmetic facts were retrieved accurately",
        "gq_2": "The child had difficulty applying mathematical concepts to word problems",
        "gq_3": "Quantitative reasoning was within the average range",
    },
    "grw": {
        "grw_1": "Reading decoding was accurate but slow",
        "grw_2": "Reading comprehension was within the average range",
        "grw_3": "Written expression was limited in length and organization",
        "grw_4": "Spelling errors were frequent and largely phonetic",
    },
}


def get_ability(ability_id: str) -> Optional[Dict[str, str]]:
    return _ABILITIES_BY_ID.get(ability_id)


def get_sentence_bank(ability_id: str) -> Dict[str, str]:
    """Returns the id -> sentence mapping for one ability (empty for unknown ids)."""
    return dict(SENTENCE_BANK.get(ability_id, {}))
