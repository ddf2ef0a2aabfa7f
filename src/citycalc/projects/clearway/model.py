# citycalc/projects/clearway/model.py
"""
ClearWay pricing model: smart road-network management for IZS routing.

Pipeline::

    1. CI      = (V * d * 365) / L
    2. Qf      = 1 - exp(-CI / K_FLEET)                  fleet/frequency quality
    3. Qt      = min(1, exp(-(T - T_IDEAL) / T_IDEAL))    data freshness quality
    4. R       = clamp(coverage_pct / 100, 0, 1)
    5. L_meas  = R * L
    6. Q       = R * Qf * Qt                              combined quality
    7. SV      = E * alpha * delta_t * Cm
    8. SV_real = SV * Q;  P = a * L + b * SV_real

Degenerate inputs are not guarded: ``L=0`` gives ``CI=inf`` and the result
propagates as ``inf``/``nan``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

import numpy as np

from citycalc.contracts.city import City
from citycalc.contracts.project import ParamMeta
from citycalc.projects.numeric import as_float

# Annual passes per km needed to reach ~63 % of the maximum information value
K_FLEET = 100
# Optimal data freshness for IZS routing (days)
T_IDEAL = 3

# Fallback coverage for legacy cities that cannot be converted
DEFAULT_COVERAGE_PCT = 60


@dataclass(frozen=True)
class ClearWayInputs:
    L: float
    coverage_pct: float
    V: float
    d: float
    T: float
    E: float
    alpha: float
    delta_t: float
    Cm: float
    a: float
    b: float

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ClearWayInputs":
        return cls(**{f.name: as_float(params.get(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class ClearWayResult:
    CI: float
    Qf: float
    Qt: float
    R: float
    L_measured: float
    Q: float
    SV: float
    SV_real: float
    P: float

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def compute_model(inputs: ClearWayInputs) -> ClearWayResult:
    x = {f.name: np.float64(getattr(inputs, f.name)) for f in fields(inputs)}

    with np.errstate(all="ignore"):
        CI = (x["V"] * x["d"] * 365) / x["L"]
        Qf = 1 - np.exp(-CI / K_FLEET)
        Qt = np.minimum(1.0, np.exp(-(x["T"] - T_IDEAL) / T_IDEAL))
        R = np.clip(x["coverage_pct"] / 100, 0.0, 1.0)
        L_measured = R * x["L"]
        Q = R * Qf * Qt
        SV = x["E"] * x["alpha"] * x["delta_t"] * x["Cm"]
        SV_real = SV * Q
        P = x["a"] * x["L"] + x["b"] * SV_real

    return ClearWayResult(
        CI=float(CI),
        Qf=float(Qf),
        Qt=float(Qt),
        R=float(R),
        L_measured=float(L_measured),
        Q=float(Q),
        SV=float(SV),
        SV_real=float(SV_real),
        P=float(P),
    )


def evaluate(params: Mapping[str, Any]) -> dict[str, float]:
    """Generic adapter used by the project registry."""
    return compute_model(ClearWayInputs.from_params(params)).as_dict()


def migrate_city(city: City) -> City:
    """Upgrade a v1 city (``L_measured`` in km) to ``coverage_pct`` (0-100)."""
    params = city.params
    if params.get("coverage_pct") is not None:
        return city

    L = params.get("L")
    L_measured = params.get("L_measured")
    if isinstance(L, (int, float)) and L > 0 and isinstance(L_measured, (int, float)):
        pct = min(100, math.floor(L_measured / L * 100 + 0.5))
    else:
        pct = DEFAULT_COVERAGE_PCT

    migrated = {k: v for k, v in params.items() if k != "L_measured"}
    migrated["coverage_pct"] = pct
    return City(id=city.id, name=city.name, params=migrated)


PARAM_META: dict[str, ParamMeta] = {
    # Infrastruktura
    "L": ParamMeta(
        label="Délka silniční sítě",
        symbol="L",
        unit="km",
        min=10,
        max=5000,
        step=10,
        group="Infrastruktura",
    ),
    "coverage_pct": ParamMeta(
        label="Pokrytí sítě",
        symbol="Lₘ",
        unit="%",
        min=0,
        max=100,
        step=1,
        group="Infrastruktura",
    ),
    # Sběr dat
    "V": ParamMeta(
        label="Počet měřicích vozidel",
        symbol="V",
        unit="vozidel",
        min=1,
        max=100,
        step=1,
        group="Sběr dat",
    ),
    "d": ParamMeta(
        label="Průměrný denní nájezd",
        symbol="d",
        unit="km/den",
        min=10,
        max=500,
        step=5,
        group="Sběr dat",
    ),
    "T": ParamMeta(
        label="Požadovaný interval aktualizace",
        symbol="T",
        unit="dní",
        min=1,
        max=30,
        step=1,
        group="Sběr dat",
    ),
    # IZS parametry
    "E": ParamMeta(
        label="Výjezdy IZS ročně",
        symbol="E",
        unit="výjezdů/rok",
        min=100,
        max=500000,
        step=500,
        group="IZS parametry",
    ),
    "alpha": ParamMeta(
        label="Podíl ovlivněných výjezdů",
        symbol="α",
        unit="",
        min=0.01,
        max=1.0,
        step=0.01,
        group="IZS parametry",
    ),
    "delta_t": ParamMeta(
        label="Průměrná úspora času / výjezd",
        symbol="Δt",
        unit="min",
        min=0.5,
        max=30,
        step=0.5,
        group="IZS parametry",
    ),
    "Cm": ParamMeta(
        label="Ekonomická hodnota minuty",
        symbol="Cₘ",
        unit="Kč/min",
        min=500,
        max=50000,
        step=500,
        group="IZS parametry",
    ),
    # Cenový model
    "a": ParamMeta(
        label="Jednotková cena infrastruktury",
        symbol="a",
        unit="Kč/km",
        min=100,
        max=10000,
        step=100,
        group="Cenový model",
    ),
    "b": ParamMeta(
        label="Podíl generované hodnoty systému",
        symbol="b",
        unit="",
        min=0.01,
        max=0.5,
        step=0.01,
        group="Cenový model",
    ),
}

PARAM_GROUPS = ["Infrastruktura", "Sběr dat", "IZS parametry", "Cenový model"]

PRESET_CITIES: list[dict[str, Any]] = [
    {
        "name": "Plzeň",
        "L": 420, "coverage_pct": 60,
        "V": 5, "d": 75, "T": 3,
        "E": 15000, "alpha": 0.15, "delta_t": 1.5, "Cm": 5000,
        "a": 1000, "b": 0.10,
    },
    {
        "name": "Praha",
        "L": 3800, "coverage_pct": 60,
        "V": 18, "d": 120, "T": 3,
        "E": 110000, "alpha": 0.12, "delta_t": 2.0, "Cm": 5000,
        "a": 1200, "b": 0.10,
    },
    {
        "name": "Brno",
        "L": 900, "coverage_pct": 60,
        "V": 7, "d": 80, "T": 4,
        "E": 32000, "alpha": 0.13, "delta_t": 1.5, "Cm": 5000,
        "a": 1000, "b": 0.10,
    },
    {
        "name": "Ostrava",
        "L": 850, "coverage_pct": 60,
        "V": 6, "d": 80, "T": 5,
        "E": 28000, "alpha": 0.12, "delta_t": 1.5, "Cm": 5000,
        "a": 950, "b": 0.10,
    },
    {
        "name": "Olomouc",
        "L": 380, "coverage_pct": 60,
        "V": 3, "d": 70, "T": 7,
        "E": 10000, "alpha": 0.10, "delta_t": 1.0, "Cm": 5000,
        "a": 900, "b": 0.10,
    },
    {
        "name": "Liberec",
        "L": 460, "coverage_pct": 60,
        "V": 4, "d": 70, "T": 7,
        "E": 11000, "alpha": 0.10, "delta_t": 1.0, "Cm": 5000,
        "a": 900, "b": 0.10,
    },
]
