"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database and a fake Redis.
"""

from datetime import date, time
from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ritto.database import build_engine, get_db, init_db
from ritto.dependencies import get_payments, get_redis
from ritto.main import app
from ritto.models import Business, Service
from ritto.services.schedule import add_weekly_schedule

# 2030-06-03 is a Monday, far enough ahead to never be "in the past"
MONDAY = date(2030, 6, 3)
TUESDAY = date(2030, 6, 4)
TODAY = date(2030, 6, 1)

OWNER = "owner-1"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", timeout_seconds=5, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def broken_redis():
    """Redis whose every command fails with ConnectionError."""
    server = fakeredis.FakeServer()
    server.connected = False
    return fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture
def make_business(db):
    counter = {"n": 0}

    def _make(**overrides) -> Business:
        counter["n"] += 1
        values = {
            "owner_id": f"owner-{counter['n']}",
            "name": f"Salon {counter['n']}",
            "slug": f"salon-{counter['n']}",
            "slot_interval_minutes": 30,
            "deposit_enabled": False,
            "deposit_type": "fixed",
            "deposit_value": Decimal("0"),
            "accepts_bookings": True,
        }
        values.update(overrides)
        business = Business(**values)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business

    return _make


@pytest.fixture
def make_service(db):
    def _make(business: Business, **overrides) -> Service:
        values = {
            "business_id": business.id,
            "name": "Haircut",
            "price": Decimal("1000"),
            "duration": 30,
            "is_active": True,
        }
        values.update(overrides)
        service = Service(**values)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    return _make


@pytest.fixture
def business(make_business):
    return make_business()


@pytest.fixture
def service(make_service, business):
    return make_service(business)


@pytest.fixture
def monday_schedule(db, business):
    """Monday 09:00-12:00, capacity 2."""
    return add_weekly_schedule(db, business.id, ["monday"], time(9, 0), time(12, 0), capacity=2)


@pytest.fixture
def client(session_factory, redis):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: redis
    app.dependency_overrides[get_payments] = lambda: None

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
