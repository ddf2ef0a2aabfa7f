# citycalc/api/discovery.py
"""
Root-level discovery and health endpoints.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from citycalc.api.deps import get_project, get_registry
from citycalc.api.schemas import HealthResponse
from citycalc.contracts.project import ProjectDefinition
from citycalc.core.registry import ProjectRegistry

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(registry: ProjectRegistry = Depends(get_registry)) -> HealthResponse:
    return HealthResponse(status="healthy", projects=len(registry))


@router.get("/projects")
async def list_projects(registry: ProjectRegistry = Depends(get_registry)) -> list[dict]:
    """Discover all known pricing projects."""
    return registry.describe()


@router.get("/projects/{project}")
async def describe_project(
    definition: ProjectDefinition = Depends(get_project),
) -> dict:
    """Parameter metadata, presets and view capabilities of one project."""
    return definition.describe()
