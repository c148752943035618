"""
Tests for DataMind API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import DASHBOARD_PAYLOAD, SALES_CSV, StubEngine
from datamind.config import get_settings
from datamind.deps import get_session_store
from datamind.main import app
from datamind.modules.analysis.service import AnalysisService
from datamind.modules.sessions import InMemorySessionStore
from datamind.observability import MetricsStore, get_metrics_store


@pytest.fixture
def stub_engine():
    return StubEngine()


@pytest.fixture
def client(stub_engine):
    """Create test client backed by a scripted engine."""
    store = InMemorySessionStore(
        service_factory=lambda: AnalysisService(engine=stub_engine, metrics=MetricsStore())
    )
    app.dependency_overrides[get_session_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _create_session(client) -> str:
    response = client.post("/sessions")
    assert response.status_code == 201
    return response.json()["id"]


def _upload(client, session_id, text=SALES_CSV):
    return client.post(
        f"/sessions/{session_id}/upload",
        files={"file": ("sales.csv", text.encode("utf-8"), "text/csv")},
    )


@pytest.fixture
def dashboard_session(client, stub_engine):
    stub_engine.queue(DASHBOARD_PAYLOAD)
    session_id = _create_session(client)
    assert _upload(client, session_id).status_code == 200
    return session_id


class TestHealth:
    """Health check tests."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["features"] == {"chat": True, "chart_builder": True, "sample_data": True}

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestRoot:
    """Root endpoint tests."""

    def test_root_endpoint(self, client):
        """Test root endpoint returns welcome message."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert "message" in data
        assert "docs" in data


class TestOpenAPI:
    """OpenAPI schema tests."""

    def test_openapi_available(self, client):
        """Test OpenAPI schema is available."""
        response = client.get("/openapi.json")
        assert response.status_code == 200

        data = response.json()
        assert data["openapi"].startswith("3.")
        assert data["info"]["title"] == "DataMind API"


class TestSessions:
    """Session lifecycle endpoints."""

    def test_create_session(self, client):
        response = client.post("/sessions")
        data = response.json()

        assert data["phase"] == "upload"
        assert data["busy"] is False
        assert data["rowCount"] == 0
        assert data["analysis"] is None
        assert len(data["messages"]) == 1

    def test_unknown_session(self, client):
        response = client.get("/sessions/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_upload_builds_dashboard(self, client, stub_engine):
        stub_engine.queue(DASHBOARD_PAYLOAD)
        session_id = _create_session(client)

        response = _upload(client, session_id)

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "dashboard"
        assert data["rowCount"] == 3
        assert data["columns"] == ["Month", "Revenue", "Region"]
        assert data["analysis"]["datasetTitle"] == "Quarterly Sales"
        assert data["analysis"]["charts"][0]["xAxisKey"] == "Month"

    def test_upload_without_rows(self, client, stub_engine):
        session_id = _create_session(client)

        response = _upload(client, session_id, "Month,Revenue\n")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INGESTION_FAILED"
        assert stub_engine.prompts == []

    def test_upload_analysis_failure(self, client, stub_engine):
        stub_engine.queue("not json")
        session_id = _create_session(client)

        response = _upload(client, session_id)

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "ANALYSIS_FAILED"
        state = client.get(f"/sessions/{session_id}").json()
        assert state["phase"] == "upload"
        assert state["rowCount"] == 0

    def test_upload_not_utf8(self, client):
        session_id = _create_session(client)

        response = client.post(
            f"/sessions/{session_id}/upload",
            files={"file": ("data.csv", b"\xff\xfe\x00a,b", "text/csv")},
        )

        assert response.status_code == 422

    def test_upload_twice_conflicts(self, client, dashboard_session):
        response = _upload(client, dashboard_session)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_upload_too_large(self, client, monkeypatch):
        monkeypatch.setenv("ANALYSIS_MAX_UPLOAD_BYTES", "10")
        get_settings.cache_clear()
        session_id = _create_session(client)

        response = _upload(client, session_id)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_sample_data(self, client, stub_engine):
        stub_engine.queue(DASHBOARD_PAYLOAD)
        session_id = _create_session(client)

        response = client.post(f"/sessions/{session_id}/sample", params={"seed": 3})

        assert response.status_code == 200
        assert response.json()["rowCount"] == 12

    def test_dataset_rows(self, client, dashboard_session):
        response = client.get(f"/sessions/{dashboard_session}/data")

        data = response.json()
        assert data["rowCount"] == 3
        assert data["rows"][0] == {"Month": "Jan", "Revenue": 100, "Region": "North"}

    def test_reset(self, client, dashboard_session):
        response = client.post(f"/sessions/{dashboard_session}/reset")

        data = response.json()
        assert data["phase"] == "upload"
        assert data["analysis"] is None

    def test_delete(self, client):
        session_id = _create_session(client)

        assert client.delete(f"/sessions/{session_id}").status_code == 204
        assert client.get(f"/sessions/{session_id}").status_code == 404


class TestChat:
    """Chat endpoint tests."""

    def test_chat_requires_dashboard(self, client):
        session_id = _create_session(client)

        response = client.post(f"/sessions/{session_id}/chat", json={"message": "Hello"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "NO_DASHBOARD"

    def test_chat_with_new_chart(self, client, stub_engine, dashboard_session):
        stub_engine.queue(
            {
                "textResponse": "Revenue split by region.",
                "newChart": {"title": "By Region", "type": "pie", "xAxisKey": "Region", "yAxisKey": "Revenue"},
            }
        )

        response = client.post(f"/sessions/{dashboard_session}/chat", json={"message": "Plot revenue by region"})

        assert response.status_code == 200
        data = response.json()
        assert data["userMessage"]["content"] == "Plot revenue by region"
        assert data["reply"]["content"] == "Revenue split by region."
        assert data["newChart"]["type"] == "pie"

        state = client.get(f"/sessions/{dashboard_session}").json()
        assert state["analysis"]["charts"][0]["id"] == data["newChart"]["id"]

    def test_chat_failure_is_apology(self, client, stub_engine, dashboard_session):
        stub_engine.queue("not json")

        response = client.post(f"/sessions/{dashboard_session}/chat", json={"message": "Why?"})

        assert response.status_code == 200
        assert response.json()["newChart"] is None
        assert "sorry" in response.json()["reply"]["content"].lower()

    def test_blank_message(self, client, dashboard_session):
        response = client.post(f"/sessions/{dashboard_session}/chat", json={"message": "   "})

        assert response.status_code == 400

    def test_chat_disabled(self, client, dashboard_session, monkeypatch):
        monkeypatch.setenv("FEATURE_CHAT", "false")
        get_settings.cache_clear()

        response = client.post(f"/sessions/{dashboard_session}/chat", json={"message": "Hello"})

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "FEATURE_DISABLED"


class TestCharts:
    """Chart endpoints."""

    def test_add_chart_defaults(self, client, dashboard_session):
        response = client.post(f"/sessions/{dashboard_session}/charts", json={})

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "New Chart"
        assert data["xAxisKey"] == "Month"
        assert data["yAxisKey"] == "Revenue"

    def test_update_chart_type(self, client, dashboard_session):
        response = client.patch(f"/sessions/{dashboard_session}/charts/0", json={"type": "line"})

        assert response.status_code == 200
        assert response.json()["type"] == "line"

    def test_update_unknown_index(self, client, dashboard_session):
        response = client.patch(f"/sessions/{dashboard_session}/charts/99", json={"type": "line"})

        assert response.status_code == 404

    def test_chart_spec(self, client, dashboard_session):
        response = client.get(f"/sessions/{dashboard_session}/charts/0/spec")

        assert response.status_code == 200
        data = response.json()
        assert data["library"] == "plotly"
        assert data["spec"]["data"][0]["y"] == [100, 150, 120]


class TestMetrics:
    """Metrics endpoint."""

    def test_metrics_counts_api_errors(self, client):
        get_metrics_store().reset()

        client.get("/sessions/missing")
        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.json()["global_errors"]["NOT_FOUND"] == 1
