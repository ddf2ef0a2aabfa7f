# citycalc/core/workbench.py
"""
City workbench – the editing session for one project.

Keeps the project's cities in memory so edits are visible immediately, and
persists them through a :class:`~citycalc.contracts.store.CityStore`:

* ``load`` seeds an empty project with its first preset and upgrades legacy
  records via ``ProjectDefinition.migrate``.
* ``update_param`` changes memory synchronously and schedules a debounced
  write for that city.
* ``add_city`` / ``delete_city`` hit the store right away.
"""
from __future__ import annotations

import logging
from typing import Any

from citycalc.contracts.city import City
from citycalc.contracts.project import ProjectDefinition
from citycalc.contracts.store import CityStore
from citycalc.core.debounce import DebouncedSaver

logger = logging.getLogger(__name__)


class CityWorkbench:
    def __init__(
        self,
        project: ProjectDefinition,
        store: CityStore,
        *,
        debounce_seconds: float | None = None,
    ) -> None:
        self.project = project
        self._store = store
        self._saver = DebouncedSaver(store.upsert, delay=debounce_seconds)
        self._cities: list[City] = []
        self._active_city_id: str | None = None
        self._loaded = False

    # -- state ---------------------------------------------------------------

    @property
    def cities(self) -> list[City]:
        return list(self._cities)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def saving(self) -> bool:
        return self._saver.saving

    @property
    def active_city_id(self) -> str | None:
        return self._active_city_id

    @property
    def active_city(self) -> City | None:
        return self.get_city(self._active_city_id) if self._active_city_id else None

    def set_active(self, city_id: str | None) -> None:
        if city_id is not None and self.get_city(city_id) is None:
            raise KeyError(f"City '{city_id}' not found in project '{self.project.slug}'")
        self._active_city_id = city_id

    def get_city(self, city_id: str) -> City | None:
        return next((c for c in self._cities if c.id == city_id), None)

    # -- lifecycle -----------------------------------------------------------

    async def load(self) -> list[City]:
        slug = self.project.slug
        try:
            stored = await self._store.get(slug)

            if not stored:
                seed = self.project.city_from_preset(0)
                await self._store.upsert(slug, seed)
                logger.info("Seeded project '%s' with preset '%s'", slug, seed.name)
                self._cities = [seed]
            else:
                migrated = [self.project.migrate(c) for c in stored]
                self._cities = migrated
                for before, after in zip(stored, migrated):
                    if after != before:
                        logger.info("Migrated legacy city '%s' (%s)", after.id, slug)
                        await self._store.upsert(slug, after)

            self._active_city_id = self._cities[0].id
            return self.cities
        finally:
            self._loaded = True

    async def flush(self) -> None:
        await self._saver.flush()

    async def close(self) -> None:
        await self.flush()

    # -- editing -------------------------------------------------------------

    async def add_city(self, name: str, **defaults: Any) -> City:
        """Create a city from the first preset, overridden by ``defaults``."""
        self.project.validate_params(defaults)
        city = self.project.new_city(name, **defaults)
        await self._store.upsert(self.project.slug, city)
        self._cities.append(city)
        self._active_city_id = city.id
        return city

    async def delete_city(self, city_id: str) -> None:
        # A pending edit must not resurrect the row after the delete
        await self._saver.cancel(city_id)
        await self._store.delete(self.project.slug, city_id)
        self._cities = [c for c in self._cities if c.id != city_id]
        if self._active_city_id == city_id:
            self._active_city_id = self._cities[0].id if self._cities else None

    def update_param(
        self, city_id: str, key: str, value: Any, *, snap: bool = False
    ) -> City | None:
        """Apply one parameter edit in memory and schedule its persistence.

        Returns the updated city, or ``None`` when the id is unknown.
        Must be called from a running event loop.
        """
        self.project.validate_params({key: value})
        if snap and key in self.project.param_meta:
            value = self.project.param_meta[key].quantize(value)

        for i, city in enumerate(self._cities):
            if city.id == city_id:
                updated = city.with_param(key, value)
                self._cities[i] = updated
                self._saver.schedule(self.project.slug, updated)
                return updated
        return None

    # -- results -------------------------------------------------------------

    def results(self, city_id: str | None = None) -> dict[str, float] | None:
        city = self.get_city(city_id) if city_id else self.active_city
        if city is None:
            return None
        return self.project.evaluate_city(city)

    def compare(self) -> list[tuple[City, dict[str, float]]]:
        return [(c, self.project.evaluate_city(c)) for c in self._cities]
