# tests/api/test_discovery.py
from __future__ import annotations

from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "projects": 2}


def test_list_projects(client: TestClient) -> None:
    resp = client.get("/projects")
    assert resp.status_code == 200
    slugs = [p["slug"] for p in resp.json()]
    assert slugs == ["clearway", "dalris"]


def test_describe_project(client: TestClient) -> None:
    resp = client.get("/projects/clearway")
    assert resp.status_code == 200
    body = resp.json()
    assert body["version"] == "v2.0"
    assert body["description"] == "Cenový model inteligentní správy silniční sítě — Smart City / IZS"
    assert body["has_charts"] is True
    assert body["param_groups"][0] == "Infrastruktura"
    assert body["param_meta"]["coverage_pct"]["max"] == 100
    assert body["preset_cities"][0]["name"] == "Plzeň"


def test_unknown_project_is_404(client: TestClient) -> None:
    resp = client.get("/projects/nonexistent")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Unknown project: nonexistent"
