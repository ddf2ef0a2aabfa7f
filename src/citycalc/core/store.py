# citycalc/core/store.py
"""
City stores.

* :class:`SqlCityStore` – SQLAlchemy async, one JSON ``params`` column per row.
* :class:`MemoryCityStore` – process-local, used by tests and demos.

Both keep insertion order on read and treat ``upsert`` as last-write-wins.
"""
from __future__ import annotations

import copy
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from citycalc.contracts.city import City
from citycalc.contracts.store import CityStore
from citycalc.core.db import get_sessionmaker, session_scope
from citycalc.db.models import CityRow

logger = logging.getLogger(__name__)


class MemoryCityStore(CityStore):
    def __init__(self) -> None:
        self._cities: dict[str, dict[str, City]] = {}

    async def get(self, slug: str) -> list[City]:
        return [copy.deepcopy(c) for c in self._cities.get(slug, {}).values()]

    async def upsert(self, slug: str, city: City) -> None:
        bucket = self._cities.setdefault(slug, {})
        bucket[city.id] = copy.deepcopy(city)

    async def delete(self, slug: str, city_id: str) -> None:
        self._cities.get(slug, {}).pop(city_id, None)


class SqlCityStore(CityStore):
    """Relational store; ``params`` holds everything except ``id`` and ``name``."""

    def __init__(
        self, sessionmaker: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._sessionmaker = sessionmaker

    def _session(self):
        return session_scope(self._sessionmaker or get_sessionmaker())

    async def get(self, slug: str) -> list[City]:
        async with self._session() as session:
            res = await session.execute(
                select(CityRow)
                .where(CityRow.project_slug == slug)
                .order_by(CityRow.created_at.asc())
            )
            rows = res.scalars().all()
        return [City(id=r.id, name=r.name, params=dict(r.params or {})) for r in rows]

    async def upsert(self, slug: str, city: City) -> None:
        async with self._session() as session:
            row = await session.get(CityRow, city.id)
            if row is None:
                session.add(
                    CityRow(
                        id=city.id,
                        project_slug=slug,
                        name=city.name,
                        params=copy.deepcopy(city.params),
                    )
                )
                logger.info("Created city '%s' in project '%s'", city.id, slug)
            else:
                # Ownership (project_slug) of an existing row is never rewritten
                row.name = city.name
                row.params = copy.deepcopy(city.params)

    async def delete(self, slug: str, city_id: str) -> None:
        async with self._session() as session:
            await session.execute(
                delete(CityRow).where(
                    CityRow.id == city_id,
                    CityRow.project_slug == slug,
                )
            )
        logger.info("Deleted city '%s' from project '%s'", city_id, slug)
