"""Tests for PostgreSQL store error handling, without a database server."""

import asyncpg
import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.database import PostgresLinkStore
from shortlinks.errors import StoreUnavailableError
from shortlinks.service import LinkService
from web_app import create_app

DB_URL = "postgresql://postgres:wrong@db:5432/shortlinks"


class FakeConnection:
    def __init__(self, error=None):
        self.error = error

    async def fetchrow(self, query, *args):
        if self.error:
            raise self.error
        return None

    async def fetchval(self, query, *args):
        if self.error:
            raise self.error
        return 1


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.released = []

    async def acquire(self, timeout=None):
        return self.conn

    async def release(self, conn):
        self.released.append(conn)

    async def close(self):
        pass


@pytest.fixture
def refused(monkeypatch):
    """Every pool creation fails with a server-side authentication error."""
    async def create_pool(*args, **kwargs):
        raise asyncpg.exceptions.InvalidPasswordError('password authentication failed for user "postgres"')

    monkeypatch.setattr(asyncpg, "create_pool", create_pool)


def install_pool(monkeypatch, pool):
    async def create_pool(*args, **kwargs):
        return pool

    monkeypatch.setattr(asyncpg, "create_pool", create_pool)


class TestConnectFailures:
    """Rejections while connecting mean the store is unavailable."""

    async def test_auth_error_is_unavailable(self, refused):
        store = PostgresLinkStore(DB_URL)

        with pytest.raises(StoreUnavailableError):
            await store.get("abc123")

    async def test_auth_error_health_is_false(self, refused):
        store = PostgresLinkStore(DB_URL)

        assert await store.health_check() is False

    async def test_auth_error_over_http(self, refused):
        store = PostgresLinkStore(DB_URL)
        service = LinkService(store=store)
        config = Config(database_url="memory://", base_url="http://testserver")
        app = create_app(store_instance=store, service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            listed = await client.get("/api/links")
            health = await client.get("/api/health")

        assert listed.status_code == 503
        assert "error" in listed.json()
        assert health.status_code == 200
        assert health.json()["status"] == "unhealthy"
        assert health.json()["database"] == "unhealthy"


class TestQueryFailures:
    """Errors from a query on a live connection."""

    async def test_query_error_propagates(self, monkeypatch):
        pool = FakePool(FakeConnection(asyncpg.exceptions.UndefinedTableError('relation "links" does not exist')))
        install_pool(monkeypatch, pool)
        store = PostgresLinkStore(DB_URL)

        with pytest.raises(asyncpg.exceptions.UndefinedTableError):
            await store.get("abc123")
        assert pool.released == [pool.conn]

    async def test_lost_connection_is_unavailable(self, monkeypatch):
        pool = FakePool(FakeConnection(asyncpg.exceptions.ConnectionDoesNotExistError("connection was closed")))
        install_pool(monkeypatch, pool)
        store = PostgresLinkStore(DB_URL)

        with pytest.raises(StoreUnavailableError):
            await store.get("abc123")
        assert pool.released == [pool.conn]

    async def test_health_check_false_on_query_error(self, monkeypatch):
        install_pool(monkeypatch, FakePool(FakeConnection(asyncpg.exceptions.UndefinedTableError("missing"))))
        store = PostgresLinkStore(DB_URL)

        assert await store.health_check() is False

    async def test_healthy(self, monkeypatch):
        pool = FakePool(FakeConnection())
        install_pool(monkeypatch, pool)
        store = PostgresLinkStore(DB_URL)

        assert await store.health_check() is True
        await store.close()
