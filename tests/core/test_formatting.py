# tests/core/test_formatting.py
import math

from citycalc.core.formatting import (
    NBSP,
    UNAVAILABLE,
    compare_row,
    format_results,
    format_value,
    sanitize_results,
)
from citycalc.projects.clearway import clearway_project
from citycalc.projects.dalris import dalris_project


class TestFormatValue:
    def test_non_finite_renders_marker(self):
        for value in (math.inf, -math.inf, math.nan, None, "abc"):
            assert format_value(value, "num") == UNAVAILABLE
            assert format_value(value, "czk") == UNAVAILABLE
            assert format_value(value, "pct") == UNAVAILABLE

    def test_currency_groups_thousands(self):
        assert format_value(1_393_763.4, "czk") == f"1{NBSP}393{NBSP}763{NBSP}Kč"

    def test_percent_scales_fraction(self):
        assert format_value(0.577, "pct") == f"57,7{NBSP}%"
        assert format_value(1, "pct", 0) == f"100{NBSP}%"

    def test_decimal_comma(self):
        assert format_value(325.893, "num", 1) == "325,9"
        assert format_value(12, "num") == "12"

    def test_negative_values(self):
        assert format_value(-1500, "num") == f"-1{NBSP}500"
        assert format_value(-0.0001, "num") == "0"

    def test_text_passthrough(self):
        assert format_value("Plzeň", "text") == "Plzeň"
        assert format_value(None, "text") == ""


def test_sanitize_results_replaces_non_finite():
    out = sanitize_results({"a": 1.5, "b": math.inf, "c": math.nan})
    assert out == {"a": 1.5, "b": None, "c": None}


def test_format_results_uses_column_formats():
    results = clearway_project.evaluate(
        {**dict(clearway_project.preset_cities[0]), "L": 0}
    )
    formatted = format_results(clearway_project, results)
    assert formatted["CI"] == UNAVAILABLE
    assert formatted["R"] == f"60,0{NBSP}%"
    # No column for SV: plain number with two decimals
    assert formatted["SV"] == f"16{NBSP}875{NBSP}000,00"


def test_compare_row_merges_inputs_and_results():
    preset = dict(dalris_project.preset_cities[0])
    flat = {"id": "x", **preset}
    row = compare_row(dalris_project, flat, dalris_project.evaluate(preset))
    assert list(row) == [c.key for c in dalris_project.compare_columns]
    assert row["name"] == "Plzeň"
    assert row["t_recovery"] == "24"
    assert row["totalCAPEX"] == f"750{NBSP}000{NBSP}Kč"
