from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from fastapi import status

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


class TestCorrelationIdMiddleware:
    """Test correlation ID middleware functionality."""

    def test_correlation_id_generated(self, test_client: TestClient) -> None:
        response = test_client.get("/api/authors")
        assert response.status_code == status.HTTP_200_OK
        generated = response.headers["X-Request-ID"]
        assert uuid.UUID(generated)

    def test_correlation_id_echoed(
        self, test_client: TestClient, headers_with_correlation: dict[str, str]
    ) -> None:
        response = test_client.get("/api/authors", headers=headers_with_correlation)
        assert response.headers["X-Request-ID"] == headers_with_correlation["X-Request-ID"]

    def test_correlation_id_on_error_responses(self, test_client: TestClient) -> None:
        response = test_client.get("/api/books/999", headers={"X-Request-ID": "trace-me"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.headers["X-Request-ID"] == "trace-me"

    def test_unique_ids_per_request(self, test_client: TestClient) -> None:
        first = test_client.get("/").headers["X-Request-ID"]
        second = test_client.get("/").headers["X-Request-ID"]
        assert first != second

    def test_request_is_logged(self, test_client: TestClient, caplog) -> None:
        with caplog.at_level("INFO", logger="library_api.core.middleware_correlation"):
            test_client.get("/api/authors", headers={"X-Request-ID": "logged-id"})

        records = [r for r in caplog.records if r.name == "library_api.core.middleware_correlation"]
        assert records
        assert "GET /api/authors -> 200" in records[-1].getMessage()
        assert records[-1].request_id == "logged-id"

    def test_service_logs_carry_request_id(self, test_client: TestClient, caplog) -> None:
        with caplog.at_level("INFO", logger="library_api.services.author_service"):
            response = test_client.post(
                "/api/authors",
                json={"name": "Logged Author", "birthDate": "1950-01-01"},
                headers={"X-Request-ID": "svc-req"},
            )

        records = [r for r in caplog.records if r.name == "library_api.services.author_service"]
        assert records[-1].getMessage() == "Created author"
        assert records[-1].request_id == "svc-req"
        assert records[-1].author_id == response.json()["id"]
