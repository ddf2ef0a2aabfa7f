from __future__ import annotations

from citycalc.contracts.project import CompareColumn, ProjectDefinition
from citycalc.projects.clearway.model import (
    PARAM_GROUPS,
    PARAM_META,
    PRESET_CITIES,
    evaluate,
    migrate_city,
)

clearway_project = ProjectDefinition(
    slug="clearway",
    name="ClearWay",
    description="Cenový model inteligentní správy silniční sítě — Smart City / IZS",
    version="v2.0",
    accent_color="#1d6fe8",
    evaluator=evaluate,
    param_meta=PARAM_META,
    preset_cities=PRESET_CITIES,
    param_groups=PARAM_GROUPS,
    has_charts=True,
    compare_columns=[
        CompareColumn(key="name", label="Město", fmt="text", align="left"),
        CompareColumn(key="L", label="L (km)", fmt="num"),
        CompareColumn(key="V", label="V", fmt="num"),
        CompareColumn(key="T", label="T (dní)", fmt="num"),
        CompareColumn(key="CI", label="CI", fmt="num", decimals=1),
        CompareColumn(key="R", label="R %", fmt="pct"),
        CompareColumn(key="Qf", label="Qf %", fmt="pct"),
        CompareColumn(key="Q", label="Q %", fmt="pct"),
        CompareColumn(key="SV_real", label="SV_real (Kč)", fmt="czk"),
        CompareColumn(key="P", label="P (Kč/rok)", fmt="czk"),
    ],
    migrate=migrate_city,
)
