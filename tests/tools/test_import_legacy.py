# tests/tools/test_import_legacy.py
import asyncio
import json
from pathlib import Path

import pytest

from citycalc.core.store import MemoryCityStore
from citycalc.tools import import_legacy
from citycalc.tools.import_legacy import import_cities, load_legacy_cities, main

LEGACY = [
    {"id": "c1", "name": "Plzeň", "L": 420, "L_measured": 250, "V": 5},
    {"id": "c2", "name": "Brno", "L": 900, "coverage_pct": 70},
    {"name": "No id"},
]


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "cities.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadLegacyCities:
    def test_missing_file(self, tmp_path):
        assert load_legacy_cities(tmp_path / "nope.json") is None

    def test_skips_records_without_id(self, tmp_path):
        cities = load_legacy_cities(_write(tmp_path, LEGACY))
        assert [c.id for c in cities] == ["c1", "c2"]
        # Copied as-is; legacy fields are upgraded on load
        assert cities[0].params["L_measured"] == 250

    def test_rejects_non_array(self, tmp_path):
        with pytest.raises(ValueError, match="JSON array"):
            load_legacy_cities(_write(tmp_path, {"id": "c1"}))


@pytest.mark.asyncio
async def test_import_cities_upserts_under_slug(tmp_path):
    store = MemoryCityStore()
    cities = load_legacy_cities(_write(tmp_path, LEGACY))

    count = await import_cities(store, "clearway", cities)

    assert count == 2
    assert [c.id for c in await store.get("clearway")] == ["c1", "c2"]


class TestMain:
    def test_unknown_project(self, tmp_path):
        assert main([str(_write(tmp_path, LEGACY)), "--project", "nope"]) == 1

    def test_missing_file_is_not_an_error(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 0

    def test_empty_array(self, tmp_path):
        assert main([str(_write(tmp_path, []))]) == 0

    def test_imports_into_store(self, tmp_path, monkeypatch):
        store = MemoryCityStore()
        monkeypatch.setattr(import_legacy, "SqlCityStore", lambda: store)

        assert main([str(_write(tmp_path, LEGACY)), "--project", "dalris"]) == 0

        cities = asyncio.run(store.get("dalris"))
        assert [c.name for c in cities] == ["Plzeň", "Brno"]

    def test_store_failure(self, tmp_path, monkeypatch):
        class BrokenStore(MemoryCityStore):
            async def upsert(self, slug, city):
                raise RuntimeError("store down")

        monkeypatch.setattr(import_legacy, "SqlCityStore", BrokenStore)
        assert main([str(_write(tmp_path, LEGACY))]) == 1
