"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.database.memory import MemoryLinkStore
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


class TickingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(clock, logger):
    """In-memory link store."""
    return MemoryLinkStore(clock=clock, logger=logger)


@pytest.fixture
def short_code_generator():
    """Seeded generator so failures are reproducible."""
    return ShortCodeGenerator(rng=random.Random(1234))


@pytest.fixture
async def service(store, short_code_generator, logger):
    """Create service instance."""
    service = LinkService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )
    yield service
    await service.close()


@pytest.fixture
def config():
    return Config(database_url="memory://", base_url="http://testserver")


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
