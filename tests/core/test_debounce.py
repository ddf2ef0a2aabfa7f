# tests/core/test_debounce.py
import asyncio
import logging

import pytest

from citycalc.contracts.city import City
from citycalc.core.debounce import DebouncedSaver

DELAY = 0.02


class Recorder:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[tuple[str, City]] = []
        self.fail = fail

    async def __call__(self, slug: str, city: City) -> None:
        if self.fail:
            raise RuntimeError("store down")
        self.calls.append((slug, city))


def _city(city_id: str = "c1", **params) -> City:
    return City(id=city_id, name="Test", params=params)


@pytest.mark.asyncio
async def test_rapid_edits_coalesce_into_one_write():
    save = Recorder()
    saver = DebouncedSaver(save, delay=DELAY)

    for v in range(5):
        saver.schedule("clearway", _city(V=v))
    assert saver.saving
    assert save.calls == []

    await asyncio.sleep(DELAY * 5)

    assert len(save.calls) == 1
    assert save.calls[0][1].params == {"V": 4}
    assert not saver.saving
    assert not saver.is_pending("c1")


@pytest.mark.asyncio
async def test_cities_are_debounced_independently():
    save = Recorder()
    saver = DebouncedSaver(save, delay=DELAY)

    saver.schedule("clearway", _city("a", V=1))
    saver.schedule("clearway", _city("b", V=2))
    await asyncio.sleep(DELAY * 5)

    assert sorted(c.id for _, c in save.calls) == ["a", "b"]


@pytest.mark.asyncio
async def test_flush_writes_pending_immediately():
    save = Recorder()
    saver = DebouncedSaver(save, delay=10)

    saver.schedule("dalris", _city(t_recovery=12))
    await saver.flush()

    assert save.calls == [("dalris", _city(t_recovery=12))]
    assert not saver.saving


@pytest.mark.asyncio
async def test_cancel_drops_pending_write():
    save = Recorder()
    saver = DebouncedSaver(save, delay=DELAY)

    saver.schedule("clearway", _city("a", V=1))
    saver.schedule("clearway", _city("b", V=2))
    await saver.cancel("a")
    await asyncio.sleep(DELAY * 5)

    assert [c.id for _, c in save.calls] == ["b"]


@pytest.mark.asyncio
async def test_cancel_all():
    save = Recorder()
    saver = DebouncedSaver(save, delay=DELAY)

    saver.schedule("clearway", _city("a"))
    saver.cancel_all()
    await asyncio.sleep(DELAY * 5)

    assert save.calls == []
    assert not saver.saving


@pytest.mark.asyncio
async def test_failed_write_is_logged_not_raised(caplog):
    saver = DebouncedSaver(Recorder(fail=True), delay=DELAY)

    with caplog.at_level(logging.ERROR, logger="citycalc.core.debounce"):
        saver.schedule("clearway", _city())
        await asyncio.sleep(DELAY * 5)

    assert "Failed to save city 'c1'" in caplog.text
    assert not saver.saving


@pytest.mark.asyncio
async def test_zero_delay_still_writes_latest():
    save = Recorder()
    saver = DebouncedSaver(save, delay=0)

    saver.schedule("clearway", _city(V=1))
    saver.schedule("clearway", _city(V=2))
    await asyncio.sleep(0.01)

    assert [c.params for _, c in save.calls] == [{"V": 2}]


def test_default_delay_comes_from_settings():
    from citycalc.core.config import settings

    assert DebouncedSaver(Recorder()).delay == settings.save_debounce_seconds


@pytest.mark.asyncio
async def test_cancel_releases_city_lock():
    saver = DebouncedSaver(Recorder(), delay=10)

    saver.schedule("clearway", _city("a"))
    await saver.flush()
    assert "a" in saver._locks

    await saver.cancel("a")
    assert "a" not in saver._locks
