from __future__ import annotations

from citycalc.contracts.project import CompareColumn, ProjectDefinition
from citycalc.projects.dalris.model import (
    PARAM_GROUPS,
    PARAM_META,
    PRESET_CITIES,
    evaluate,
)

dalris_project = ProjectDefinition(
    slug="dalris",
    name="DALRIS",
    description="Diagnostika a analýza lokálních rizik infrastruktury silnic",
    version="v0.1",
    accent_color="#10b981",
    evaluator=evaluate,
    param_meta=PARAM_META,
    preset_cities=PRESET_CITIES,
    param_groups=PARAM_GROUPS,
    has_charts=False,
    compare_columns=[
        CompareColumn(key="name", label="Město", fmt="text", align="left"),
        CompareColumn(key="t_recovery", label="SLA (h)", fmt="num"),
        CompareColumn(key="V_readiness", label="Pohotovost (Kč)", fmt="czk"),
        CompareColumn(key="totalMaintenance", label="Údržba (Kč)", fmt="czk"),
        CompareColumn(key="totalCAPEX", label="CAPEX (Kč)", fmt="czk"),
        CompareColumn(key="P", label="P (Kč/rok)", fmt="czk"),
    ],
    structured_params=frozenset({"tiers"}),
)
