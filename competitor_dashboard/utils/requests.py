from __future__ import annotations

import json
import math
from typing import Any, Optional

from competitor_dashboard.utils.errors import ValidationError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json_body(raw: bytes) -> Any:
    """Strict JSON: NaN/Infinity are rejected since they can't be rendered back out."""
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")


def window_param(raw: Optional[str], default: int) -> int:
    """
    Lenient skip/limit parsing: missing, non-numeric, non-finite or zero
    values mean ``default``. Range clamping is left to the store.
    """
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value) or value == 0:
        return default
    return int(value)
