# citycalc/projects/dalris/model.py
"""
DALRIS: Disaster Alert & Response Information System.

Crisis-communication pricing (LoRa sensors, WiFi info points, FM nodes)::

    V_readiness = P_base_risk * (1 + 24 / t_recovery)
    OPEX        = L_base + SUM(N_i * C_i) + V_readiness
    CAPEX       = SUM(N_i * unitCapex_i)

``t_recovery=0`` is not guarded and yields ``V_readiness=inf``.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Sequence

import numpy as np

from citycalc.contracts.project import ParamMeta
from citycalc.projects.numeric import as_float

SLA_OPTIONS = (4, 12, 24, 48, 72)


@dataclass(frozen=True)
class HardwareTier:
    name: str
    count: float  # N_i
    maintenance: float  # C_i, annual maintenance per node (CZK)
    unitCapex: float  # CAPEX per node (CZK)

    @classmethod
    def from_mapping(cls, raw: Any) -> "HardwareTier":
        if isinstance(raw, HardwareTier):
            return raw
        if not isinstance(raw, Mapping):
            raw = {}
        return cls(
            name=str(raw.get("name", "")),
            count=as_float(raw.get("count")),
            maintenance=as_float(raw.get("maintenance")),
            unitCapex=as_float(raw.get("unitCapex")),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "maintenance": self.maintenance,
            "unitCapex": self.unitCapex,
        }


@dataclass(frozen=True)
class DalrisInputs:
    L_base: float  # base platform fee (CZK)
    P_base_risk: float  # base risk fee (CZK)
    t_recovery: float  # SLA recovery hours
    tiers: tuple[HardwareTier, ...] = ()

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "DalrisInputs":
        raw_tiers = params.get("tiers")
        # Absent or malformed tiers contribute nothing
        if isinstance(raw_tiers, Sequence) and not isinstance(raw_tiers, (str, bytes)):
            tiers = tuple(HardwareTier.from_mapping(t) for t in raw_tiers)
        else:
            tiers = ()
        return cls(
            L_base=as_float(params.get("L_base")),
            P_base_risk=as_float(params.get("P_base_risk")),
            t_recovery=as_float(params.get("t_recovery")),
            tiers=tiers,
        )


@dataclass(frozen=True)
class DalrisResult:
    V_readiness: float
    totalMaintenance: float
    P_OPEX: float
    totalCAPEX: float
    P: float  # alias of P_OPEX, shared price key across projects

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def compute_model(inputs: DalrisInputs) -> DalrisResult:
    with np.errstate(all="ignore"):
        V_readiness = np.float64(inputs.P_base_risk) * (
            1 + 24 / np.float64(inputs.t_recovery)
        )
        total_maintenance = np.float64(0.0)
        total_capex = np.float64(0.0)
        for tier in inputs.tiers:
            total_maintenance += np.float64(tier.count) * tier.maintenance
            total_capex += np.float64(tier.count) * tier.unitCapex
        P_OPEX = np.float64(inputs.L_base) + total_maintenance + V_readiness

    return DalrisResult(
        V_readiness=float(V_readiness),
        totalMaintenance=float(total_maintenance),
        P_OPEX=float(P_OPEX),
        totalCAPEX=float(total_capex),
        P=float(P_OPEX),
    )


def evaluate(params: Mapping[str, Any]) -> dict[str, float]:
    """Generic adapter used by the project registry."""
    return compute_model(DalrisInputs.from_params(params)).as_dict()


PARAM_META: dict[str, ParamMeta] = {
    "L_base": ParamMeta(
        label="Roční licence platformy",
        symbol="L_base",
        unit="Kč",
        min=100000,
        max=5000000,
        step=50000,
        group="Platforma",
    ),
    "P_base_risk": ParamMeta(
        label="Pohotovostní báze",
        symbol="P_risk",
        unit="Kč",
        min=50000,
        max=2000000,
        step=50000,
        group="SLA & Pohotovost",
    ),
    "t_recovery": ParamMeta(
        label="Doba obnovy (SLA)",
        symbol="t_rec",
        unit="h",
        min=4,
        max=72,
        step=4,
        group="SLA & Pohotovost",
    ),
}

PARAM_GROUPS = ["Platforma", "SLA & Pohotovost"]

DEFAULT_TIERS: tuple[HardwareTier, ...] = (
    HardwareTier(name="Senzor (LoRaWAN)", count=50, maintenance=2500, unitCapex=8000),
    HardwareTier(name="WiFi Info Point", count=10, maintenance=8000, unitCapex=45000),
    HardwareTier(name="FM vysílací uzel", count=3, maintenance=15000, unitCapex=120000),
)


def _tiers(sensors: int, wifi: int, fm: int) -> list[dict[str, Any]]:
    return [
        {"name": "Senzor (LoRaWAN)", "count": sensors, "maintenance": 2500, "unitCapex": 8000},
        {"name": "WiFi Info Point", "count": wifi, "maintenance": 8000, "unitCapex": 45000},
        {"name": "FM vysílací uzel", "count": fm, "maintenance": 15000, "unitCapex": 120000},
    ]


PRESET_CITIES: list[dict[str, Any]] = [
    {
        "name": "Plzeň",
        "L_base": 500000,
        "P_base_risk": 200000,
        "t_recovery": 24,
        "tiers": _tiers(30, 6, 2),
    },
    {
        "name": "Praha",
        "L_base": 2000000,
        "P_base_risk": 800000,
        "t_recovery": 12,
        "tiers": _tiers(150, 30, 8),
    },
    {
        "name": "Brno",
        "L_base": 800000,
        "P_base_risk": 350000,
        "t_recovery": 24,
        "tiers": _tiers(50, 10, 3),
    },
]
