"""
JSON extraction and validation for model output.

The model is asked for a bare JSON object but often wraps it in prose or
markdown fences, so the first ``{...}`` span of the reply is parsed.
"""
import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from upi_extractor.models.scheme import ProcessingData
from upi_extractor.utils.exceptions import ExtractionError

logger = logging.getLogger(__name__)

_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

EXTRACTION_FAILED_MESSAGE = "Failed to extract structured data from the text."


def extract_json_object(response_text: str) -> Dict[str, Any]:
    """Parse the first JSON-looking object in ``response_text``."""
    match = _JSON_OBJECT_PATTERN.search(response_text or "")
    if not match:
        raise ExtractionError(EXTRACTION_FAILED_MESSAGE, details={"reason": "no JSON object in model output"})

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Model returned invalid JSON: {e}")
        raise ExtractionError(EXTRACTION_FAILED_MESSAGE, details={"reason": "invalid JSON in model output"})

    if not isinstance(parsed, dict):
        raise ExtractionError(EXTRACTION_FAILED_MESSAGE, details={"reason": "model output is not an object"})
    return parsed


def _as_optional_str(value: Any):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


class JSONValidator:
    """Coerces a loosely typed model reply into :class:`ProcessingData`."""

    FIELDS = ("date", "utr", "amount_in_inr")

    def validate(self, data: Dict[str, Any]) -> ProcessingData:
        cleaned = {field: _as_optional_str(data.get(field)) for field in self.FIELDS}
        cleaned["is_edited"] = _as_bool(data.get("is_edited", False))
        try:
            return ProcessingData(**cleaned)
        except PydanticValidationError as e:
            raise ExtractionError(EXTRACTION_FAILED_MESSAGE, details={"reason": str(e)})
