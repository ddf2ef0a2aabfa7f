# citycalc/core/client.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from citycalc.contracts.city import City
from citycalc.contracts.store import CityStore

logger = logging.getLogger(__name__)


class CitiesApiClient(CityStore):
    """City store backed by the calculator's REST API.

    ``transport`` lets tests route requests straight into an ASGI app.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _url(self, slug: str) -> str:
        return f"{self._base}/projects/{slug}/cities"

    @staticmethod
    def _cities(payload: Any) -> list[City]:
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected cities payload: {payload!r}")
        return [City.from_flat(item) for item in payload]

    async def get(self, slug: str) -> list[City]:
        async with self._client() as client:
            r = await client.get(self._url(slug))
            r.raise_for_status()
            return self._cities(r.json())

    async def upsert(self, slug: str, city: City) -> None:
        async with self._client() as client:
            r = await client.post(self._url(slug), json={"city": city.to_flat()})
            r.raise_for_status()

    async def delete(self, slug: str, city_id: str) -> None:
        async with self._client() as client:
            r = await client.delete(self._url(slug), params={"id": city_id})
            r.raise_for_status()

    async def results(self, slug: str, city_id: str) -> dict[str, Any]:
        async with self._client() as client:
            r = await client.get(f"{self._url(slug)}/{city_id}/results")
            r.raise_for_status()
            return r.json()
