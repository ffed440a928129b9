"""
TxtStore — HTTP Route Tests
============================

What:  End-to-end tests of the router through HTTPX's ASGITransport.
Why:   Validates status codes, JSON shapes, and the plain-text failure body
       clients actually see.

What we test:
    ✅ The create → list → delete → delete-again scenario
    ✅ Input shape errors (non-string body, non-integer id, out-of-range id) are 4xx
    ✅ Any store failure is a 500 with non-empty text
    ✅ Greeting, readiness, and request ID header
    ✅ Unexpected errors are logged with the caller's request ID
"""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from txtstore.main import create_app
from txtstore.routes.health import GREETING


class TestRecordScenario:
    """The canonical create/list/delete walk-through."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client):
        response = await test_client.post("/txt", json="hello")
        assert response.status_code == 200
        assert response.json() == {"id": 1, "txt": "hello"}

        response = await test_client.get("/txt")
        assert response.status_code == 200
        assert response.json() == [{"id": 1, "txt": "hello"}]

        response = await test_client.delete("/txt/1")
        assert response.status_code == 200
        assert response.json() == {"id": 1, "txt": "hello"}

        response = await test_client.delete("/txt/1")
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "no record with id 1"

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/txt")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_created_ids_are_unique(self, test_client):
        """Each create should get a fresh id, and list should show them all."""
        ids = []
        for txt in ("a", "b", "c"):
            response = await test_client.post("/txt", json=txt)
            ids.append(response.json()["id"])

        assert len(set(ids)) == 3
        listed = await test_client.get("/txt")
        assert sorted(item["id"] for item in listed.json()) == sorted(ids)


class TestInputShape:
    """Malformed input is rejected before reaching the store."""

    @pytest.mark.asyncio
    async def test_non_integer_id_rejected(self, test_client):
        response = await test_client.delete("/txt/abc")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_non_string_body_rejected(self, test_client):
        response = await test_client.post("/txt", json=123)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_object_body_rejected(self, test_client):
        response = await test_client.post("/txt", json={"txt": "hello"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_body_rejected(self, test_client):
        response = await test_client.post("/txt")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_id_beyond_64_bits_rejected(self, test_client):
        """An id no database integer can hold is an input error, not a 500."""
        response = await test_client.delete("/txt/99999999999999999999")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_id_beyond_32_bits_rejected(self, test_client):
        """The id column is a 32-bit INTEGER; larger ids never reach the store."""
        response = await test_client.delete("/txt/2147483648")
        assert response.status_code == 422

        response = await test_client.delete("/txt/-2147483649")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_id_at_upper_bound_reaches_store(self, test_client):
        response = await test_client.delete("/txt/2147483647")
        assert response.status_code == 500
        assert response.text == "no record with id 2147483647"


class TestStoreFailures:
    """Every store failure maps to 500 with the error text as the body."""

    @pytest.mark.asyncio
    async def test_create_failure(self, broken_client):
        response = await broken_client.post("/txt", json="hello")
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert "unable to open database file" in response.text

    @pytest.mark.asyncio
    async def test_list_failure(self, broken_client):
        response = await broken_client.get("/txt")
        assert response.status_code == 500
        assert response.text

    @pytest.mark.asyncio
    async def test_delete_failure(self, broken_client):
        response = await broken_client.delete("/txt/1")
        assert response.status_code == 500
        assert response.text


class TestHealthRoutes:
    """Greeting, readiness, and request correlation."""

    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == GREETING

    @pytest.mark.asyncio
    async def test_root_does_not_touch_store(self, broken_client):
        """Liveness should not depend on the database."""
        response = await broken_client.get("/")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_disconnected(self, broken_client):
        response = await broken_client.get("/health")
        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/txt")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/txt", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestUnexpectedErrors:
    """Failures outside the store hit the catch-all handler."""

    @pytest.mark.asyncio
    async def test_unexpected_error_logged_with_request_id(self, store, caplog):
        app = create_app(store)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        caplog.set_level(logging.ERROR, logger="txtstore.main")
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom", headers={"X-Request-ID": "trace-9"})

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        messages = [r.getMessage() for r in caplog.records if r.name == "txtstore.main"]
        assert any(m.startswith("[trace-9] Unexpected error: kaboom") for m in messages)
