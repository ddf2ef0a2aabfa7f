from __future__ import annotations

from fastapi import HTTPException, Request

from citycalc.api.exceptions import NotFound
from citycalc.contracts.project import ProjectDefinition
from citycalc.contracts.store import CityStore
from citycalc.core.registry import ProjectRegistry


def get_registry(request: Request) -> ProjectRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=500, detail="Project registry not initialized")
    return registry


def get_store(request: Request) -> CityStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="City store not initialized")
    return store


def get_project(project: str, request: Request) -> ProjectDefinition:
    definition = get_registry(request).lookup(project)
    if definition is None:
        raise NotFound(f"Unknown project: {project}")
    return definition
