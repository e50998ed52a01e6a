"""Integration tests for issue routes."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from issuetracker.api.app import create_app
from issuetracker.api.dependencies import get_issue_service
from issuetracker.service import IssueService


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def client(temp_db_path: str):
    """Create a test client with temporary database."""
    app = create_app(f"sqlite:///{temp_db_path}")
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    Path(temp_db_path).unlink(missing_ok=True)
    Path(f"{temp_db_path}-wal").unlink(missing_ok=True)
    Path(f"{temp_db_path}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestIssueCrudFullFlow:
    """Integration test for full CRUD flow."""

    def test_create_get_delete_get(self, client: TestClient) -> None:
        """POST -> 201 open; GET -> 200; DELETE -> 200; GET -> 404."""
        create_response = client.post("/api/issues", json={"title": "T", "description": "D"})
        assert create_response.status_code == 201
        created = create_response.json()
        assert created["status"] == "open"

        get_response = client.get(f"/api/issues/{created['id']}")
        assert get_response.status_code == 200
        assert get_response.json() == created

        delete_response = client.delete(f"/api/issues/{created['id']}")
        assert delete_response.status_code == 200

        assert client.get(f"/api/issues/{created['id']}").status_code == 404

    def test_update_flow(self, client: TestClient) -> None:
        """Create -> Update -> List."""
        issue_id = client.post(
            "/api/issues", json={"title": "Login bug", "description": "Cannot sign in"}
        ).json()["id"]

        update_response = client.put(
            f"/api/issues/{issue_id}", json={"status": "in-progress"}
        )
        assert update_response.status_code == 200

        listed = client.get("/api/issues").json()
        assert len(listed) == 1
        assert listed[0]["status"] == "in-progress"
        assert listed[0]["title"] == "Login bug"

    def test_missing_ids_report_not_found(self, client: TestClient) -> None:
        assert client.get("/api/issues/12345").status_code == 404
        assert client.put("/api/issues/12345", json={"title": "X"}).status_code == 404
        assert client.delete("/api/issues/12345").status_code == 404


@pytest.mark.integration
class TestAppSurface:
    """Health check and OpenAPI documentation."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_openapi_json_available(self, client: TestClient) -> None:
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/issues" in paths
        assert "/api/issues/{issue_id}" in paths

    def test_cors_headers(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})
        assert "access-control-allow-origin" in response.headers

    def test_cors_headers_on_unexpected_error(self, client: TestClient) -> None:
        """Generic failure responses still carry CORS headers."""
        service = MagicMock(spec=IssueService)
        service.create_issue.side_effect = RuntimeError("boom")
        client.app.dependency_overrides[get_issue_service] = lambda: service

        response = client.post(
            "/api/issues",
            json={"title": "T", "description": "D"},
            headers={"Origin": "http://localhost:5173"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Failed to create issue"}
        assert "access-control-allow-origin" in response.headers
