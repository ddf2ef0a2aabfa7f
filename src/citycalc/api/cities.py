# citycalc/api/cities.py
"""
City CRUD plus derived results for one project.

URL structure::

    GET    /projects/{project}/cities
    POST   /projects/{project}/cities            body: {"city": {...}}
    DELETE /projects/{project}/cities?id=...
    GET    /projects/{project}/cities/{city_id}/results
    GET    /projects/{project}/compare

Every mutation answers with the project's full, freshly read city list.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from citycalc.api.deps import get_project, get_store
from citycalc.api.exceptions import BadRequest, NotFound
from citycalc.api.schemas import CityResultsResponse, CityUpsertRequest, CompareResponse
from citycalc.contracts.city import City
from citycalc.contracts.project import ProjectDefinition
from citycalc.contracts.store import CityStore
from citycalc.core.formatting import compare_row, format_results, sanitize_results

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project}", tags=["cities"])


async def _list(store: CityStore, slug: str) -> list[dict[str, Any]]:
    return [c.to_flat() for c in await store.get(slug)]


def _store_failure(slug: str) -> HTTPException:
    logger.exception("[%s/cities API] store operation failed", slug)
    return HTTPException(status_code=500, detail="Internal server error")


@router.get("/cities")
async def list_cities(
    definition: ProjectDefinition = Depends(get_project),
    store: CityStore = Depends(get_store),
) -> list[dict[str, Any]]:
    try:
        return await _list(store, definition.slug)
    except Exception as exc:
        raise _store_failure(definition.slug) from exc


@router.post("/cities")
async def upsert_city(
    body: CityUpsertRequest,
    definition: ProjectDefinition = Depends(get_project),
    store: CityStore = Depends(get_store),
) -> list[dict[str, Any]]:
    if not body.city or not body.city.get("id"):
        raise BadRequest("Missing city or city.id")

    city = City.from_flat(body.city)
    try:
        definition.validate_params(city.params)
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc

    try:
        await store.upsert(definition.slug, city)
        return await _list(store, definition.slug)
    except Exception as exc:
        raise _store_failure(definition.slug) from exc


@router.delete("/cities")
async def delete_city(
    city_id: str | None = Query(default=None, alias="id"),
    definition: ProjectDefinition = Depends(get_project),
    store: CityStore = Depends(get_store),
) -> list[dict[str, Any]]:
    if not city_id:
        raise BadRequest("Missing id query param")

    try:
        await store.delete(definition.slug, city_id)
        return await _list(store, definition.slug)
    except Exception as exc:
        raise _store_failure(definition.slug) from exc


@router.get("/cities/{city_id}/results", response_model=CityResultsResponse)
async def city_results(
    city_id: str,
    definition: ProjectDefinition = Depends(get_project),
    store: CityStore = Depends(get_store),
) -> CityResultsResponse:
    try:
        cities = await store.get(definition.slug)
    except Exception as exc:
        raise _store_failure(definition.slug) from exc

    city = next((c for c in cities if c.id == city_id), None)
    if city is None:
        raise NotFound(f"City '{city_id}' not found in project '{definition.slug}'")

    results = definition.evaluate_city(definition.migrate(city))
    return CityResultsResponse(
        id=city.id,
        name=city.name,
        results=sanitize_results(results),
        formatted=format_results(definition, results),
    )


@router.get("/compare", response_model=CompareResponse)
async def compare_cities(
    definition: ProjectDefinition = Depends(get_project),
    store: CityStore = Depends(get_store),
) -> CompareResponse:
    if definition.compare_columns is None:
        raise NotFound(f"Project '{definition.slug}' has no comparison view")

    try:
        cities = await store.get(definition.slug)
    except Exception as exc:
        raise _store_failure(definition.slug) from exc

    rows = []
    for city in cities:
        city = definition.migrate(city)
        rows.append(compare_row(definition, city.to_flat(), definition.evaluate_city(city)))

    return CompareResponse(
        columns=[c.describe() for c in definition.compare_columns],
        rows=rows,
    )
