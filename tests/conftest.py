"""Test configuration and fixtures"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.api.deps import get_dispatcher
from app.models.customer import Customer, MembershipTier
from app.services.events import EventDispatcher
from app.services.settings import ReservationPolicy


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingSender:
    """Stands in for celery_app.send_task"""

    def __init__(self):
        self.sent = []

    def __call__(self, task_name, args=None):
        self.sent.append((task_name, args or []))

    def names(self):
        return [name for name, _ in self.sent]


def failing_sender(task_name, args=None):
    raise ConnectionError("broker unavailable")


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def dispatcher(sender):
    return EventDispatcher(sender=sender)


@pytest.fixture
def failing_dispatcher():
    """Dispatcher whose broker is down"""
    return EventDispatcher(sender=failing_sender)


@pytest.fixture
def policy():
    return ReservationPolicy(max_table_capacity=50)


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
async def test_customer(test_db):
    """A Bronze customer with no points"""
    customer = Customer(
        name="Ada Diner",
        email="ada@example.com",
        phone="+15551234567",
        loyalty_points=0,
        tier=MembershipTier.BRONZE.value,
    )
    test_db.add(customer)
    await test_db.commit()
    await test_db.refresh(customer)
    return customer


@pytest.fixture
async def client(test_db, dispatcher):
    """Create test client with overridden database and task dispatch"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
