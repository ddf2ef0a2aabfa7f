from __future__ import annotations

import math
from typing import Any


def as_float(value: Any) -> float:
    """Coerce a loosely-typed parameter value; anything unusable becomes ``nan``."""
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def is_finite(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
