# citycalc/main.py
"""
Pricing calculator application factory.

Wires the immutable project registry and a city store into a FastAPI app
exposing project discovery, city CRUD and derived results.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from citycalc.api.cities import router as cities_router
from citycalc.api.discovery import router as discovery_router
from citycalc.api.exceptions import BadRequest, NotFound
from citycalc.contracts.store import CityStore
from citycalc.core.config import settings
from citycalc.core.db import init_db
from citycalc.core.logging import configure_logging
from citycalc.core.registry import PROJECT_REGISTRY, ProjectRegistry
from citycalc.core.store import SqlCityStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.database_create_tables and isinstance(app.state.store, SqlCityStore):
        try:
            await init_db()
        except Exception:
            logger.exception("Failed to initialize database")
            raise
    yield


async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _bad_request(request: Request, exc: BadRequest) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app(
    *,
    store: CityStore | None = None,
    registry: ProjectRegistry | None = None,
) -> FastAPI:
    """Build and wire the calculator FastAPI application."""
    configure_logging(settings.log_level, json=settings.log_json)
    logger.info("Creating calculator application (env=%s)", settings.app_env)

    app = FastAPI(
        title="City pricing calculator",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Explicit wiring
    app.state.registry = registry if registry is not None else PROJECT_REGISTRY
    app.state.store = store if store is not None else SqlCityStore()

    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(BadRequest, _bad_request)

    app.include_router(discovery_router)
    app.include_router(cities_router)

    logger.info(
        "Calculator ready: %d project(s): %s",
        len(app.state.registry),
        ", ".join(app.state.registry.list_slugs()),
    )
    return app
