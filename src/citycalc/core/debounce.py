# citycalc/core/debounce.py
"""
Per-city trailing-edge debounce for persistence writes.

Each city id owns a single pending slot. Scheduling a save while one is
pending cancels the old timer and starts a new one; when the quiet window
elapses the latest city snapshot is written once and the slot is cleared.
Writes for the same id never overlap; writes for different ids are
independent.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from citycalc.contracts.city import City
from citycalc.core.config import settings

logger = logging.getLogger(__name__)

SaveFn = Callable[[str, City], Awaitable[None]]


@dataclass
class _Pending:
    timer: asyncio.Task
    slug: str
    city: City


class DebouncedSaver:
    """
    Coalesces rapid edits of one city into a single write.

    Example:
        saver = DebouncedSaver(store.upsert, delay=0.3)
        saver.schedule("clearway", city)   # edit 1
        saver.schedule("clearway", city2)  # edit 2 within 300 ms, replaces 1
        await saver.flush()                # or wait; city2 is written once
    """

    def __init__(self, save: SaveFn, *, delay: float | None = None) -> None:
        self._save = save
        self._delay = settings.save_debounce_seconds if delay is None else delay
        self._pending: dict[str, _Pending] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._running: set[asyncio.Task] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def saving(self) -> bool:
        """True while any write is pending or in flight."""
        return bool(self._pending) or bool(self._running)

    def is_pending(self, city_id: str) -> bool:
        return city_id in self._pending

    def schedule(self, slug: str, city: City) -> None:
        """Replace the pending write for ``city.id`` and restart its timer."""
        previous = self._pending.pop(city.id, None)
        if previous is not None:
            previous.timer.cancel()

        timer = asyncio.get_running_loop().create_task(
            self._fire_after_delay(city.id),
            name=f"debounced-save-{city.id}",
        )
        self._pending[city.id] = _Pending(timer=timer, slug=slug, city=city)
        self._running.add(timer)
        timer.add_done_callback(self._running.discard)

    async def _fire_after_delay(self, city_id: str) -> None:
        await asyncio.sleep(self._delay)

        entry = self._pending.get(city_id)
        if entry is None or entry.timer is not asyncio.current_task():
            return
        # From here on a newer edit starts its own slot instead of cancelling us
        del self._pending[city_id]
        await self._write(entry.slug, entry.city)

    async def _write(self, slug: str, city: City) -> None:
        lock = self._locks.setdefault(city.id, asyncio.Lock())
        async with lock:
            try:
                await self._save(slug, city)
                logger.debug("Saved city '%s' (%s)", city.id, slug)
            except Exception:
                logger.exception("Failed to save city '%s' (%s)", city.id, slug)

    async def flush(self) -> None:
        """Write every pending city now and wait for in-flight writes."""
        pending = list(self._pending.values())
        self._pending.clear()
        for entry in pending:
            entry.timer.cancel()

        await asyncio.gather(*(self._write(e.slug, e.city) for e in pending))

        running = [t for t in self._running if t is not asyncio.current_task()]
        if running:
            await asyncio.gather(*running, return_exceptions=True)

    def cancel_all(self) -> None:
        """Drop every pending write without saving it."""
        for entry in self._pending.values():
            entry.timer.cancel()
        self._pending.clear()

    async def cancel(self, city_id: str) -> None:
        """Drop the pending write for one city and wait out any write in flight."""
        entry = self._pending.pop(city_id, None)
        if entry is not None:
            entry.timer.cancel()
        lock = self._locks.get(city_id)
        if lock is not None:
            async with lock:
                pass
            if city_id not in self._pending and not lock.locked():
                del self._locks[city_id]
