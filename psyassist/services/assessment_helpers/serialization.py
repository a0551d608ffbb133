# /psyassist/services/assessment_helpers/serialization.py

"""
Conversion between `AssessmentData` and the JSON blob of an assessment row.

Loading is forgiving: the blob may be missing, may come back as a
JSON string instead of a dict (depending on the driver), or may hold fields
written by an older revision or corrupted by hand. Every field that cannot be
read falls back to its default instead of failing the whole read.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from ...models.assessment_model import ASSESSMENT_SCHEMA_VERSION, AssessmentData

logger = logging.getLogger(__name__)

_FIELD_ADAPTERS = {
    name: TypeAdapter(field.annotation)
    for name, field in AssessmentData.model_fields.items()
    if name != "schemaVersion"
}


def dump_assessment_data(data: AssessmentData) -> Dict[str, Any]:
    """Serializes the aggregate to a JSON-compatible dict for the blob column."""
    return data.model_dump(mode="json")


def load_assessment_data(raw: Any, assessment_id: Optional[str] = None) -> AssessmentData:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Assessment %s has an unparsable data blob; using empty defaults.", assessment_id)
            raw = None

    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Assessment %s has a non-object data blob; using empty defaults.", assessment_id)
        return AssessmentData()

    values: Dict[str, Any] = {}
    for name, adapter in _FIELD_ADAPTERS.items():
        if raw.get(name) is None:
            continue
        try:
            values[name] = adapter.validate_python(raw[name])
        except ValidationError as e:
            logger.warning(
                "Assessment %s: field '%s' is malformed and was reset (%d errors).",
                assessment_id, name, e.error_count(),
            )

    # Older blobs are upgraded in memory; the next save writes the current version.
    values["schemaVersion"] = ASSESSMENT_SCHEMA_VERSION
    return AssessmentData(**values)
