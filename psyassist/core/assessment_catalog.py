# /psyassist/core/assessment_catalog.py

from typing import Dict, List

# Suggested tool names for score entry. The tool field stays free text.
DIAGNOSTIC_TOOLS: List[str] = [
    "WISC-V",
    "WAIS-IV",
    "Woodcock-Johnson IV",
    "NEPSY-II",
    "Alef Test",
    "VMI",
    "TOVA",
    "CPT-3",
    "Writing Assessment",
    "Arithmetic Assessment",
    "Reading Assessment",
    "Phonological Awareness Assessment",
    "Test of Variables of Attention",
    "Rey Complex Figure",
    "Tower of London",
    "Wisconsin Card Sorting Test",
]

# Starter set offered on every new assessment, all unselected.
STARTER_RECOMMENDATIONS: List[Dict[str, str]] = [
    {"id": "1", "title": "Extra time on tests"},
    {"id": "2", "title": "Enlarged font in learning materials"},
    {"id": "3", "title": "Splitting assignments into short segments"},
    {"id": "4", "title": "Frequent breaks"},
    {"id": "5", "title": "Use of assistive technology"},
    {"id": "6", "title": "Seating near the teacher"},
    {"id": "7", "title": "Instructions given both in writing and orally"},
    {"id": "8", "title": "Developing learning strategies"},
    {"id": "9", "title": "Improving organizational skills"},
    {"id": "10", "title": "Play therapy"},
]
