"""ClearWay: road-network data collection priced by the IZS value it creates."""
from citycalc.projects.clearway.model import (
    K_FLEET,
    PARAM_META,
    PRESET_CITIES,
    T_IDEAL,
    ClearWayInputs,
    ClearWayResult,
    compute_model,
    evaluate,
    migrate_city,
)
from citycalc.projects.clearway.project import clearway_project

__all__ = [
    "K_FLEET",
    "PARAM_META",
    "PRESET_CITIES",
    "T_IDEAL",
    "ClearWayInputs",
    "ClearWayResult",
    "clearway_project",
    "compute_model",
    "evaluate",
    "migrate_city",
]
