"""
Daily Diet Backend: User Route Tests
======================================

What:  GET /users, POST /users and the session cookie they issue.
How:   HTTPX AsyncClient against the real app and a temporary SQLite schema.
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from dailydiet.database import async_session_factory
from dailydiet.models.user import User


async def _users_with_session(session_id: str):
    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.session_id == session_id))
        return list(result.scalars().all())


class TestHello:

    @pytest.mark.asyncio
    async def test_get_users_says_hello(self, test_client):
        response = await test_client.get("/users")

        assert response.status_code == 200
        assert response.text == "Hello World"


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_sets_session_cookie(self, test_client):
        response = await test_client.post(
            "/users", json={"name": "Ana", "email": "ana@example.com"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Ana"
        assert body["email"] == "ana@example.com"
        assert "session_id" not in body

        session_id = response.cookies.get("sessionId")
        assert session_id

        set_cookie = response.headers["set-cookie"]
        assert "Path=/" in set_cookie
        assert "Max-Age=604800" in set_cookie

        users = await _users_with_session(session_id)
        assert [u.email for u in users] == ["ana@example.com"]

    @pytest.mark.asyncio
    async def test_register_again_keeps_existing_cookie(self, test_client):
        first = await test_client.post(
            "/users", json={"name": "Ana", "email": "ana@example.com"}
        )
        session_id = first.cookies["sessionId"]

        second = await test_client.post(
            "/users", json={"name": "Bia", "email": "bia@example.com"}
        )

        assert second.status_code == 201
        assert "set-cookie" not in second.headers
        assert test_client.cookies.get("sessionId") == session_id

        users = await _users_with_session(session_id)
        assert sorted(u.name for u in users) == ["Ana", "Bia"]

    @pytest.mark.asyncio
    async def test_each_new_browser_gets_its_own_session(self, client_factory):
        browser_a = await client_factory()
        browser_b = await client_factory()

        a = await browser_a.post("/users", json={"name": "Ana", "email": "same@example.com"})
        b = await browser_b.post("/users", json={"name": "Ana", "email": "same@example.com"})

        assert a.status_code == b.status_code == 201
        assert a.cookies["sessionId"] != b.cookies["sessionId"]

    @pytest.mark.asyncio
    async def test_register_missing_email_rejected(self, test_client):
        response = await test_client.post("/users", json={"name": "Ana"})

        assert response.status_code == 422
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.post(
            "/users",
            json={"name": "Ana", "email": "ana@example.com"},
            headers={"X-Request-ID": "abc12345"},
        )

        assert response.headers["X-Request-ID"] == "abc12345"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_database_down(self, test_client):
        broken_engine = MagicMock()
        broken_engine.connect.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )

        with patch("dailydiet.routes.health.engine", broken_engine):
            response = await test_client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
