from __future__ import annotations

from abc import ABC, abstractmethod

from citycalc.contracts.city import City


class CityStore(ABC):
    """Persists cities partitioned by project slug. CRUD only, last write wins."""

    @abstractmethod
    async def get(self, slug: str) -> list[City]: ...

    @abstractmethod
    async def upsert(self, slug: str, city: City) -> None: ...

    @abstractmethod
    async def delete(self, slug: str, city_id: str) -> None: ...
