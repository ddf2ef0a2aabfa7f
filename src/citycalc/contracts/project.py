# citycalc/contracts/project.py
"""
Project contract.

A project is one pricing-model variant. It bundles:

* a **parameter metadata table** describing every numeric input,
* a **model evaluator** turning a city's parameters into derived results,
* preset cities, display grouping and optional comparison columns.

Each concrete project keeps its own typed inputs behind ``evaluate``; the
generic presentation and REST layers only ever see string-keyed mappings.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Literal, Mapping, Protocol, Sequence, runtime_checkable

from citycalc.contracts.city import City

ValueFormat = Literal["num", "czk", "pct", "text"]
Align = Literal["left", "right"]


@dataclass(frozen=True)
class ParamMeta:
    """Static description of one numeric input."""

    label: str
    symbol: str
    unit: str
    min: float
    max: float
    step: float
    group: str

    def __post_init__(self) -> None:
        if not self.min <= self.max:
            raise ValueError(
                f"ParamMeta '{self.symbol}': min ({self.min}) must be <= max ({self.max})"
            )
        if not self.step > 0:
            raise ValueError(f"ParamMeta '{self.symbol}': step must be > 0")

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)

    def quantize(self, value: float) -> float:
        """Clamp ``value`` and snap it to the nearest multiple of ``step``."""
        # Halves round up; the ratio is trimmed first so 0.15 / 0.01 counts as 15
        k = math.floor(round(self.clamp(value) / self.step, 10) + 0.5)
        snapped = self.clamp(k * self.step)
        # Trim float noise from the step arithmetic (0.1 + 0.2 and friends)
        digits = max(0, -math.floor(math.log10(self.step))) + 6
        return round(snapped, digits)

    def describe(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "symbol": self.symbol,
            "unit": self.unit,
            "min": self.min,
            "max": self.max,
            "step": self.step,
            "group": self.group,
        }


@dataclass(frozen=True)
class CompareColumn:
    """One column of the comparison table."""

    key: str
    label: str
    fmt: ValueFormat
    align: Align = "right"
    decimals: int | None = None

    def describe(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "fmt": self.fmt,
            "align": self.align,
        }
        if self.decimals is not None:
            out["decimals"] = self.decimals
        return out


@runtime_checkable
class ModelEvaluator(Protocol):
    """Pure, total function: parameters in, derived results out.

    Must not raise for numeric input. Degenerate inputs propagate as
    ``inf``/``nan`` instead.
    """

    def __call__(self, params: Mapping[str, Any]) -> dict[str, float]: ...


def _identity(city: City) -> City:
    return city


@dataclass(frozen=True)
class ProjectDefinition:
    """Immutable bundle describing one pricing project.

    Attributes:
        slug: Lowercase identifier used in URLs and as the storage partition key.
        name: Display name.
        description: One-line description for the project card.
        version: Model version label.
        accent_color: Hex colour of the project card.
        evaluator: The project's model evaluator.
        param_meta: Parameter metadata table, keyed by parameter name.
        preset_cities: Canned cities (without ``id``); never empty.
        param_groups: Ordered group names for the parameter sections.
        has_charts: Whether the charts view is offered.
        compare_columns: Comparison table columns, ``None`` hides the view.
        structured_params: Non-numeric parameter keys the project accepts.
        migrate: Upgrades a legacy stored city to the current schema.
    """

    slug: str
    name: str
    description: str
    version: str
    accent_color: str
    evaluator: ModelEvaluator
    param_meta: Mapping[str, ParamMeta]
    preset_cities: Sequence[Mapping[str, Any]]
    param_groups: Sequence[str]
    has_charts: bool = False
    compare_columns: Sequence[CompareColumn] | None = None
    structured_params: frozenset[str] = field(default_factory=frozenset)
    migrate: Callable[[City], City] = _identity

    def __post_init__(self) -> None:
        if not self.preset_cities:
            raise ValueError(f"Project '{self.slug}' needs at least one preset city")
        # Freeze the tables so a definition cannot drift after startup
        object.__setattr__(self, "param_meta", MappingProxyType(dict(self.param_meta)))
        object.__setattr__(
            self,
            "preset_cities",
            tuple(MappingProxyType(dict(p)) for p in self.preset_cities),
        )
        object.__setattr__(self, "param_groups", tuple(self.param_groups))
        if self.compare_columns is not None:
            object.__setattr__(self, "compare_columns", tuple(self.compare_columns))

    # -- evaluation ----------------------------------------------------------

    def evaluate(self, params: Mapping[str, Any]) -> dict[str, float]:
        return self.evaluator(params)

    def evaluate_city(self, city: City) -> dict[str, float]:
        return self.evaluator(city.params)

    # -- cities --------------------------------------------------------------

    @property
    def accepted_keys(self) -> frozenset[str]:
        return frozenset(self.param_meta) | self.structured_params

    def validate_params(self, params: Mapping[str, Any]) -> None:
        """Reject parameter keys that do not belong to this project."""
        unknown = sorted(set(params) - self.accepted_keys)
        if unknown:
            raise ValueError(
                f"Unknown parameter(s) for project '{self.slug}': {', '.join(unknown)}"
            )

    def new_city(self, name: str, **overrides: Any) -> City:
        """Instantiate the first preset under a fresh id."""
        base = {k: v for k, v in self.preset_cities[0].items() if k != "name"}
        params = _deep_copy_params({**base, **overrides})
        return City(id=str(uuid.uuid4()), name=name, params=params)

    def city_from_preset(self, index: int) -> City:
        preset = self.preset_cities[index]
        params = {k: v for k, v in preset.items() if k != "name"}
        return City(
            id=str(uuid.uuid4()),
            name=str(preset["name"]),
            params=_deep_copy_params(params),
        )

    # -- introspection -------------------------------------------------------

    def summary(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "accent_color": self.accent_color,
        }

    def describe(self) -> dict[str, Any]:
        """Machine-readable description for discovery endpoints."""
        return {
            **self.summary(),
            "param_meta": {k: m.describe() for k, m in self.param_meta.items()},
            "param_groups": list(self.param_groups),
            "preset_cities": [_deep_copy_params(p) for p in self.preset_cities],
            "has_charts": self.has_charts,
            "compare_columns": (
                [c.describe() for c in self.compare_columns]
                if self.compare_columns is not None
                else None
            ),
            "structured_params": sorted(self.structured_params),
        }


def _deep_copy_params(params: Mapping[str, Any]) -> dict[str, Any]:
    # Presets hold lists of dicts (DALRIS tiers); new cities must not share them
    out: dict[str, Any] = {}
    for k, v in params.items():
        if isinstance(v, (list, tuple)):
            out[k] = [dict(x) if isinstance(x, Mapping) else x for x in v]
        else:
            out[k] = v
    return out
