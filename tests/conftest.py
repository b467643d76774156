"""
Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database. DATABASE_URL is set before
any project module is imported so the application engine points at it.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import httpx
import pytest
from fastapi.testclient import TestClient

from domain.models import Base, engine, SessionLocal, get_db_session
from adapters import open_food_facts
from main import app

from test_fixtures import make_coach, coach_headers


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema and session for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client whose requests share the test's database session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db
    # No context manager: the lifespan (schema init) is not needed here
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def coach(db_session):
    return make_coach(db_session)


@pytest.fixture
def headers(coach):
    return coach_headers(coach)


@pytest.fixture
def off_transport():
    """
    Route Open Food Facts calls to an in-process handler.

    Usage:
        off_transport(lambda request: httpx.Response(200, json={...}))
    """
    calls = []

    def install(handler):
        def recording(request):
            calls.append(request)
            return handler(request)

        open_food_facts.connect(
            base_url="https://off.test/api/v2",
            transport=httpx.MockTransport(recording),
        )
        return calls

    yield install
    open_food_facts.close()
