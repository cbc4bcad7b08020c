from __future__ import annotations

from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .validators import require_positive_int


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_positive_int(value, field_name)


def optional_json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
