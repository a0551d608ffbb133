# /psyassist/services/assessment_helpers/passage_composer.py

from typing import Mapping, Optional, Sequence


def compose_passage(
    selected_sentence_ids: Sequence[str],
    sentence_bank: Mapping[str, str],
    custom_text: Optional[str] = "",
) -> str:
    """
    Joins the selected canned sentences of one CHC ability into a paragraph.

    Sentences are resolved in the given order; ids missing from the bank are
    dropped. Each sentence loses its own trailing period, the sentences are
    joined with ". " and the result ends with exactly one period. Non-empty
    custom text is appended after a single space.
    """
    sentences = []
    for sentence_id in selected_sentence_ids:
        text = sentence_bank.get(sentence_id)
        if text is None:
            continue
        text = text.strip().rstrip(".").rstrip()
        if text:
            sentences.append(text)

    passage = ". ".join(sentences) + "." if sentences else ""

    extra = (custom_text or "").strip()
    if extra:
        passage = f"{passage} {extra}" if passage else extra
    return passage
