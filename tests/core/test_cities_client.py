# tests/core/test_cities_client.py
import httpx
import pytest

from citycalc.contracts.city import City
from citycalc.core.client import CitiesApiClient
from citycalc.core.store import MemoryCityStore
from citycalc.main import create_app
from tests.helpers.cities import PLZEN_DALRIS


def _client(store: MemoryCityStore) -> CitiesApiClient:
    app = create_app(store=store)
    return CitiesApiClient(
        base_url="http://testserver/",
        transport=httpx.ASGITransport(app=app),
    )


@pytest.mark.asyncio
async def test_client_round_trips_through_api():
    store = MemoryCityStore()
    api = _client(store)

    city = City(id="a", name="Plzeň", params=dict(PLZEN_DALRIS))
    await api.upsert("dalris", city)

    assert await api.get("dalris") == [city]
    assert (await store.get("dalris"))[0].params["t_recovery"] == 24

    results = await api.results("dalris", "a")
    assert results["results"]["totalCAPEX"] == 750_000

    await api.delete("dalris", "a")
    assert await api.get("dalris") == []


@pytest.mark.asyncio
async def test_client_raises_on_http_error():
    api = _client(MemoryCityStore())

    with pytest.raises(httpx.HTTPStatusError):
        await api.get("nonexistent")

    with pytest.raises(httpx.HTTPStatusError):
        await api.upsert("dalris", City(id="a", name="X", params={"bogus": 1}))
