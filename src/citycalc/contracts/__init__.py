"""Public contracts shared by projects, stores and the API layer."""
from citycalc.contracts.city import City
from citycalc.contracts.project import (
    CompareColumn,
    ModelEvaluator,
    ParamMeta,
    ProjectDefinition,
)
from citycalc.contracts.store import CityStore

__all__ = [
    "City",
    "CityStore",
    "CompareColumn",
    "ModelEvaluator",
    "ParamMeta",
    "ProjectDefinition",
]
