"""Tests for the FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient

from setback_engine.api.deps import get_engine_config, get_registry, get_store
from setback_engine.core.applications.store import ApplicationStore
from setback_engine.core.compliance.engine import EngineConfig
from setback_engine.core.geometry.projection import CoordinateSystem
from setback_engine.core.registry.plots import InMemoryParcelRegistry
from setback_engine.main import app

PARCEL = {"type": "Polygon", "coordinates": [[[0, 0], [30, 0], [30, 30], [0, 30], [0, 0]]]}
CLEAR = {"type": "Polygon", "coordinates": [[[8, 8], [22, 8], [22, 22], [8, 22], [8, 8]]]}
TIGHT = {"type": "Polygon", "coordinates": [[[1.5, 1.5], [20, 1.5], [20, 20], [1.5, 20], [1.5, 1.5]]]}


@pytest.fixture
def client():
    registry = InMemoryParcelRegistry.from_records([
        {"unique_plot_no": "PLT-002", "owner_name": "Ngozi Eze", "area_sqm": 900, "geom": PARCEL},
        {"unique_plot_no": "PLT-001", "owner_name": "Emeka Obi", "area_sqm": 900, "geom": PARCEL},
        {"unique_plot_no": "PLT-009", "geom": {"type": "Point", "coordinates": [0, 0]}},
    ])
    store = ApplicationStore()
    config = EngineConfig(coordinate_system=CoordinateSystem.PROJECTED)

    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_engine_config] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


def _submit(client, footprint, plot_id="PLT-001"):
    return client.post("/api/applications", json={"plot_id": plot_id, "footprint": footprint})


class TestHealthEndpoint:
    def test_health(self, client):
        r = client.get("/api/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["registry_live"] is True
        assert data["plot_count"] == 3


class TestPlotEndpoints:
    def test_list_plots(self, client):
        r = client.get("/api/plots")
        assert r.status_code == 200
        assert [p["plot_number"] for p in r.json()] == ["PLT-001", "PLT-002", "PLT-009"]

    def test_get_plot(self, client):
        r = client.get("/api/plots/PLT-002")
        assert r.status_code == 200
        data = r.json()
        assert data["owner"] == "Ngozi Eze"
        assert data["status"] == "NOT_SUBMITTED"
        assert data["geometry"]["type"] == "Polygon"

    def test_unknown_plot(self, client):
        assert client.get("/api/plots/PLT-404").status_code == 404


class TestApplicationEndpoints:
    def test_compliant_submission(self, client):
        r = _submit(client, CLEAR)
        assert r.status_code == 200
        data = r.json()
        assert data["application_id"].startswith("APP-")
        assert data["plot_id"] == "PLT-001"
        assert data["status"] == "PENDING"
        assert data["compliance_score"] == 96
        assert data["setbacks"]["side"] == pytest.approx(8)
        assert data["setbacks"]["compliant"] is True

    def test_non_compliant_submission(self, client):
        data = _submit(client, TIGHT).json()
        assert data["status"] == "REJECTED"
        assert data["compliance_score"] == 40
        assert data["setbacks"]["errors"] == ["Side/Rear violation: 1.5m"]

    def test_feature_footprint(self, client):
        feature = {"type": "Feature", "properties": {"name": "Duplex"}, "geometry": CLEAR}
        assert _submit(client, feature).json()["status"] == "PENDING"

    def test_unknown_plot(self, client):
        assert _submit(client, CLEAR, plot_id="PLT-404").status_code == 404

    def test_invalid_footprint(self, client):
        r = _submit(client, {"type": "Polygon", "coordinates": []})
        assert r.status_code == 422

    def test_degenerate_footprint(self, client):
        flat = {"type": "Polygon", "coordinates": [[[1, 1], [5, 1], [9, 1], [1, 1]]]}
        r = _submit(client, flat)
        assert r.status_code == 422
        assert r.json()["detail"][0]["role"] == "footprint"

    def test_plot_without_geometry(self, client):
        assert _submit(client, CLEAR, plot_id="PLT-009").status_code == 422

    def test_footprint_must_be_geojson(self, client):
        assert _submit(client, {"coordinates": []}).status_code == 422

    def test_get_application(self, client):
        created = _submit(client, CLEAR).json()
        r = client.get(f"/api/applications/{created['application_id']}")
        assert r.status_code == 200
        assert r.json() == created

    def test_get_unknown_application(self, client):
        assert client.get("/api/applications/APP-MISSING00").status_code == 404


class TestDecisionEndpoint:
    def test_approve_twice(self, client):
        app_id = _submit(client, CLEAR).json()["application_id"]
        for _ in range(2):
            r = client.post(f"/api/applications/{app_id}/decision", json={"decision": "APPROVED"})
            assert r.status_code == 200
            assert r.json()["status"] == "APPROVED"
        assert r.json()["decided_by"] == "Executive Review Committee"

    def test_reject_after_approval_conflicts(self, client):
        app_id = _submit(client, CLEAR).json()["application_id"]
        client.post(f"/api/applications/{app_id}/decision", json={"decision": "APPROVED"})
        r = client.post(f"/api/applications/{app_id}/decision", json={"decision": "REJECTED"})
        assert r.status_code == 409

    def test_pending_is_not_a_decision(self, client):
        app_id = _submit(client, CLEAR).json()["application_id"]
        r = client.post(f"/api/applications/{app_id}/decision", json={"decision": "PENDING"})
        assert r.status_code == 422

    def test_unknown_application(self, client):
        r = client.post("/api/applications/APP-MISSING00/decision", json={"decision": "APPROVED"})
        assert r.status_code == 404


class TestRegistryRows:
    def test_unknown_status_row_keeps_the_registry_up(self, client):
        registry = InMemoryParcelRegistry.from_records([
            {"unique_plot_no": "PLT-001", "geom": PARCEL, "application_status": "UNDER_REVIEW"},
        ])
        app.dependency_overrides[get_registry] = lambda: registry
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["plot_count"] == 1
        assert client.get("/api/plots/PLT-001").json()["status"] == "NOT_SUBMITTED"
