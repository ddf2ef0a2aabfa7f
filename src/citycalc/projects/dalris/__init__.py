"""DALRIS: crisis-communication network priced as OPEX plus an SLA readiness premium."""
from citycalc.projects.dalris.model import (
    DEFAULT_TIERS,
    PARAM_META,
    PRESET_CITIES,
    SLA_OPTIONS,
    DalrisInputs,
    DalrisResult,
    HardwareTier,
    compute_model,
    evaluate,
)
from citycalc.projects.dalris.project import dalris_project

__all__ = [
    "DEFAULT_TIERS",
    "PARAM_META",
    "PRESET_CITIES",
    "SLA_OPTIONS",
    "DalrisInputs",
    "DalrisResult",
    "HardwareTier",
    "compute_model",
    "dalris_project",
    "evaluate",
]
