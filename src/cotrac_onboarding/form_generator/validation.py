from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Any, Dict, List

import jsonschema

from cotrac_onboarding.schemas.records import FormField

FORM_FIELDS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "label": {"type": "string"},
            "type": {"type": "string"},
            "required": {"type": "boolean"},
            "placeholder": {"type": "string"},
            "options": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["id", "label", "type", "required"],
    },
}


def _strip_code_fences(s: str) -> str:
    t = str(s or "").strip()
    t = re.sub(r"^```(?:json)?\s*", "", t, flags=re.IGNORECASE)
    t = re.sub(r"\s*```$", "", t, flags=re.IGNORECASE)
    return t.strip()


@lru_cache(maxsize=1)
def _validator() -> jsonschema.Validator:
    return jsonschema.Draft202012Validator(FORM_FIELDS_SCHEMA)


def parse_form_fields(text: Any) -> List[FormField]:
    """
    Parse the model's JSON output into FormField models.

    Raises ValueError on malformed JSON, schema violations, or unsupported field types.
    """
    raw = _strip_code_fences(str(text or ""))
    if not raw:
        raise ValueError("empty form generation response")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"form generation response is not JSON: {e}") from e

    errors = sorted(_validator().iter_errors(data), key=lambda e: list(e.path))
    if errors:
        e0 = errors[0]
        path = "/".join(str(p) for p in e0.path) or "<root>"
        raise ValueError(f"form generation response does not match schema at {path}: {e0.message}")

    # pydantic.ValidationError subclasses ValueError, so unsupported types surface the same way.
    return [FormField.model_validate(item) for item in data]
