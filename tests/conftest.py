"""Shared test fixtures for the LPG Connect tests.

Provides an in-memory SQLite engine, durable and volatile stores seeded with
the default data, a ``store`` fixture parametrized over both backends, and a
FastAPI test client wired to a durable store.
"""

import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from lpg_connect.database import Base, _build_engine
from lpg_connect.main import app
from lpg_connect.stores.memory import InMemoryApplicationStore
from lpg_connect.stores.sql import SqlApplicationStore

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite://"


def basic_auth(username, password):
    """Build an HTTP Basic Authorization header."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


ADMIN_AUTH = basic_auth("admin", "admin123")
USER1_AUTH = basic_auth("user1", "user123")


@pytest.fixture()
def test_engine():
    """Create a test database engine with in-memory SQLite.

    Uses StaticPool so a single connection is shared across threads,
    which is required because TestClient dispatches requests in a
    separate thread while the test runs on the main thread.
    """
    engine = _build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def durable_store(test_engine):
    """A SQL store on the test engine, seeded with the default data."""
    store = SqlApplicationStore(test_engine)
    store.initialize(seed=True)
    return store


@pytest.fixture()
def volatile_store():
    """An in-memory store seeded with the default data."""
    return InMemoryApplicationStore(id_start=1001, seed=True)


@pytest.fixture(params=["durable_store", "volatile_store"])
def store(request):
    """Each test using this fixture runs once per backend."""
    return request.getfixturevalue(request.param)


@pytest.fixture()
def client(durable_store):
    """Create a FastAPI test client with the test store injected."""
    app.state.store = durable_store
    with TestClient(app) as c:
        yield c
    app.state.store = None
