from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CityUpsertRequest(BaseModel):
    # Optional so a missing city is reported as 400, like a missing id
    city: dict[str, Any] | None = None


class CityResultsResponse(BaseModel):
    id: str
    name: str
    results: dict[str, float | None] = Field(default_factory=dict)
    formatted: dict[str, str] = Field(default_factory=dict)


class CompareResponse(BaseModel):
    columns: list[dict[str, Any]]
    rows: list[dict[str, str]]


class HealthResponse(BaseModel):
    status: str
    projects: int
