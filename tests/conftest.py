# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from citycalc.core.store import MemoryCityStore
from citycalc.main import create_app


@pytest.fixture
def memory_store() -> MemoryCityStore:
    return MemoryCityStore()


@pytest.fixture
def client(memory_store: MemoryCityStore) -> TestClient:
    app = create_app(store=memory_store)
    return TestClient(app)


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'cities.db'}"
