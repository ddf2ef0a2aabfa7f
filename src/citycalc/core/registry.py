# citycalc/core/registry.py
"""
Project registry – immutable slug -> ProjectDefinition mapping.

The registry is composed once at import time. There is no runtime
registration; lookups of unknown slugs return ``None`` and callers decide
how to surface the miss.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from citycalc.contracts.project import ProjectDefinition
from citycalc.projects.clearway import clearway_project
from citycalc.projects.dalris import dalris_project

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Read-only registry of project definitions, in registration order."""

    def __init__(self, projects: Iterable[ProjectDefinition]) -> None:
        projects_by_slug: dict[str, ProjectDefinition] = {}
        for project in projects:
            if project.slug in projects_by_slug:
                raise ValueError(f"Project '{project.slug}' is already registered")
            projects_by_slug[project.slug] = project
        self._projects: Mapping[str, ProjectDefinition] = MappingProxyType(
            projects_by_slug
        )
        logger.debug("Project registry ready: %s", list(projects_by_slug))

    def lookup(self, slug: str) -> ProjectDefinition | None:
        return self._projects.get(slug)

    def list_slugs(self) -> list[str]:
        return list(self._projects)

    def describe(self) -> list[dict[str, Any]]:
        return [p.summary() for p in self._projects.values()]

    def __iter__(self) -> Iterator[ProjectDefinition]:
        return iter(self._projects.values())

    def __len__(self) -> int:
        return len(self._projects)

    def __contains__(self, slug: object) -> bool:
        return slug in self._projects


PROJECT_REGISTRY = ProjectRegistry([clearway_project, dalris_project])
PROJECT_SLUGS = tuple(PROJECT_REGISTRY.list_slugs())


def get_project(slug: str) -> ProjectDefinition | None:
    return PROJECT_REGISTRY.lookup(slug)
