# citycalc/contracts/city.py
"""
City contract.

A city is the user-editable record whose parameters feed a project's pricing
formula. On the wire and in storage it travels *flat*: ``id`` and ``name``
next to the project-specific parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

RESERVED_KEYS = frozenset({"id", "name"})


@dataclass(frozen=True)
class City:
    """One stored city.

    Attributes:
        id: Unique identifier (uuid4 string for cities created here).
        name: Display name.
        params: Parameter name -> value. Numeric for most keys; projects may
            declare structured keys (e.g. DALRIS ``tiers``).
    """

    id: str
    name: str
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_flat(cls, data: Mapping[str, Any]) -> "City":
        if "id" not in data or not data["id"]:
            raise ValueError("City payload is missing 'id'")
        params = {k: v for k, v in data.items() if k not in RESERVED_KEYS}
        return cls(id=str(data["id"]), name=str(data.get("name", "")), params=params)

    def to_flat(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, **self.params}

    def with_param(self, key: str, value: Any) -> "City":
        return replace(self, params={**self.params, key: value})
