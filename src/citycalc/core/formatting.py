# citycalc/core/formatting.py
"""
Presentation-neutral value formatting.

Numbers follow Czech conventions (non-breaking space as thousands separator,
decimal comma). Non-finite values never leak as ``inf``/``nan`` literals:
they render as :data:`UNAVAILABLE` and serialize as ``None``.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from citycalc.contracts.project import CompareColumn, ProjectDefinition, ValueFormat
from citycalc.projects.numeric import is_finite

UNAVAILABLE = "\u2014"
NBSP = "\u00a0"

_DEFAULT_DECIMALS: dict[str, int] = {"num": 0, "czk": 0, "pct": 1}


def _group(value: float, decimals: int) -> str:
    text = f"{abs(value):,.{decimals}f}"
    text = text.replace(",", NBSP).replace(".", ",")
    # Avoid "-0" once rounding has eaten the magnitude
    if value < 0 and any(ch.isdigit() and ch != "0" for ch in text):
        return "-" + text
    return text


def format_value(value: Any, fmt: ValueFormat, decimals: int | None = None) -> str:
    if fmt == "text":
        return "" if value is None else str(value)
    if not is_finite(value):
        return UNAVAILABLE

    d = _DEFAULT_DECIMALS[fmt] if decimals is None else decimals
    if fmt == "pct":
        return f"{_group(value * 100, d)}{NBSP}%"
    if fmt == "czk":
        return f"{_group(value, d)}{NBSP}Kč"
    return _group(value, d)


def finite_or_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def sanitize_results(results: Mapping[str, Any]) -> dict[str, Any]:
    """Make a results mapping JSON-safe: non-finite numbers become ``None``."""
    return {k: finite_or_none(v) for k, v in results.items()}


def format_results(
    project: ProjectDefinition,
    results: Mapping[str, Any],
    *,
    decimals: int = 2,
) -> dict[str, str]:
    """Format every derived value, using the project's column format when it has one."""
    columns: dict[str, CompareColumn] = {
        c.key: c for c in (project.compare_columns or ())
    }
    out: dict[str, str] = {}
    for key, value in results.items():
        col = columns.get(key)
        if col is not None:
            out[key] = format_value(value, col.fmt, col.decimals)
        else:
            out[key] = format_value(value, "num", decimals)
    return out


def compare_row(
    project: ProjectDefinition,
    city_flat: Mapping[str, Any],
    results: Mapping[str, Any],
) -> dict[str, str]:
    """One formatted comparison-table row; results shadow same-named inputs."""
    merged = {**city_flat, **results}
    return {
        col.key: format_value(merged.get(col.key), col.fmt, col.decimals)
        for col in (project.compare_columns or ())
    }
