"""Test configuration and fixtures"""

import random
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from burger_house.clock import FixedClock
from burger_house.config import Settings
from burger_house.database import create_session_factory, init_models
from burger_house.main import create_app
from burger_house.models import LineItem
from burger_house.services import BookingArbiter, BookingManager, OrderManager
from burger_house.store import InMemoryStore
from burger_house.store.sql import SqlAlchemyStore


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"



@pytest.fixture
def clock():
    """Clock frozen at a Saturday evening"""
    return FixedClock(datetime(2025, 6, 14, 17, 30, tzinfo=timezone.utc))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with tables created"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
async def store(request):
    """Every manager test runs against both store backends"""
    if request.param == "memory":
        yield InMemoryStore()
        return

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    await init_models(engine)
    yield SqlAlchemyStore(create_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def order_manager(store, clock, rng):
    return OrderManager(store, clock=clock, rng=rng, tax_rate="0.08")


@pytest.fixture
def arbiter(store, clock):
    return BookingArbiter(store, clock=clock, capacity=10)


@pytest.fixture
def booking_manager(store):
    return BookingManager(store, max_tables=50)


@pytest.fixture
def burger_cart():
    """Classic Burger x1 and Fries x2"""
    return [
        LineItem(product_id="burger-1", name="Classic Burger", unit_price="12.99", quantity=1),
        LineItem(product_id="side-1", name="French Fries", unit_price="4.99", quantity=2),
    ]


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, store_backend="memory", slot_capacity=2, max_tables=10)


@pytest.fixture
async def client(test_settings, clock, rng):
    """API client over a fresh in-memory store"""
    app = create_app(settings=test_settings, store=InMemoryStore(), clock=clock, rng=rng)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
