# tests/core/test_workbench.py
import asyncio

import pytest

from citycalc.contracts.city import City
from citycalc.core.store import MemoryCityStore
from citycalc.core.workbench import CityWorkbench
from citycalc.projects.clearway import clearway_project
from citycalc.projects.dalris import dalris_project

DELAY = 0.02


@pytest.mark.asyncio
async def test_load_seeds_empty_project():
    store = MemoryCityStore()
    wb = CityWorkbench(dalris_project, store, debounce_seconds=DELAY)
    assert not wb.loaded

    cities = await wb.load()

    assert wb.loaded
    assert [c.name for c in cities] == ["Plzeň"]
    assert wb.active_city_id == cities[0].id
    assert [c.id for c in await store.get("dalris")] == [cities[0].id]


@pytest.mark.asyncio
async def test_load_migrates_and_persists_legacy_cities():
    store = MemoryCityStore()
    legacy = City(id="old", name="Plzeň", params={"L": 420, "L_measured": 210, "V": 5})
    await store.upsert("clearway", legacy)

    wb = CityWorkbench(clearway_project, store, debounce_seconds=DELAY)
    cities = await wb.load()

    assert cities[0].params["coverage_pct"] == 50
    assert "L_measured" not in cities[0].params
    stored = await store.get("clearway")
    assert stored[0].params["coverage_pct"] == 50


@pytest.mark.asyncio
async def test_load_marks_loaded_even_on_failure():
    class BrokenStore(MemoryCityStore):
        async def get(self, slug):
            raise RuntimeError("store down")

    wb = CityWorkbench(clearway_project, BrokenStore())
    with pytest.raises(RuntimeError):
        await wb.load()
    assert wb.loaded


@pytest.mark.asyncio
async def test_update_param_is_visible_immediately_and_saved_once():
    store = MemoryCityStore()
    wb = CityWorkbench(clearway_project, store, debounce_seconds=DELAY)
    [city] = await wb.load()

    for pct in (61, 62, 63):
        updated = wb.update_param(city.id, "coverage_pct", pct)

    assert updated is not None
    assert wb.get_city(city.id).params["coverage_pct"] == 63
    assert wb.results()["R"] == pytest.approx(0.63)
    assert wb.saving

    await asyncio.sleep(DELAY * 5)

    assert not wb.saving
    assert (await store.get("clearway"))[0].params["coverage_pct"] == 63


@pytest.mark.asyncio
async def test_update_param_snaps_and_validates():
    wb = CityWorkbench(clearway_project, MemoryCityStore(), debounce_seconds=DELAY)
    [city] = await wb.load()

    updated = wb.update_param(city.id, "L", 424, snap=True)
    assert updated.params["L"] == 420

    with pytest.raises(ValueError, match="Unknown parameter"):
        wb.update_param(city.id, "bogus", 1)

    assert wb.update_param("missing", "L", 100) is None
    await wb.close()


@pytest.mark.asyncio
async def test_snapping_keeps_preset_values():
    wb = CityWorkbench(clearway_project, MemoryCityStore(), debounce_seconds=DELAY)
    [city] = await wb.load()

    updated = wb.update_param(city.id, "E", 15000, snap=True)
    assert updated.params["E"] == 15000
    await wb.close()


@pytest.mark.asyncio
async def test_add_and_delete_city():
    store = MemoryCityStore()
    wb = CityWorkbench(dalris_project, store, debounce_seconds=DELAY)
    [first] = await wb.load()

    added = await wb.add_city("Ostrava", t_recovery=48)
    assert wb.active_city_id == added.id
    assert added.params["t_recovery"] == 48
    assert len(await store.get("dalris")) == 2

    # Pending edit must not bring the city back after deletion
    wb.update_param(added.id, "L_base", 600000)
    await wb.delete_city(added.id)
    await asyncio.sleep(DELAY * 5)

    assert [c.id for c in await store.get("dalris")] == [first.id]
    assert wb.active_city_id == first.id


@pytest.mark.asyncio
async def test_set_active_and_compare():
    wb = CityWorkbench(clearway_project, MemoryCityStore(), debounce_seconds=DELAY)
    [first] = await wb.load()
    second = await wb.add_city("Brno")

    wb.set_active(first.id)
    assert wb.active_city == first
    with pytest.raises(KeyError):
        wb.set_active("missing")

    rows = wb.compare()
    assert [c.id for c, _ in rows] == [first.id, second.id]
    assert all("P" in results for _, results in rows)
    assert wb.results(second.id) == rows[1][1]
