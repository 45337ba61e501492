"""Shared fixtures: a fresh app, store and token helpers per test."""

import pytest
from fastapi.testclient import TestClient

from taskapi.config import Settings
from taskapi.main import create_app
from taskapi.store import InMemoryTaskStore, seed_tasks
from taskapi.users import DEMO_USERS

TEST_SECRET = "test-secret-value-that-is-long-enough-for-hs256"


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings(jwt_secret=TEST_SECRET)


@pytest.fixture(name="store")
def store_fixture():
    """Seeded in-memory store: tasks 1 and 2 owned by user 1, task 3 by user 2."""
    return InMemoryTaskStore(seed_tasks())


@pytest.fixture(name="app")
def app_fixture(settings, store):
    return create_app(settings=settings, task_store=store)


@pytest.fixture(name="client")
def client_fixture(app):
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="admin")
def admin_fixture():
    return DEMO_USERS[0]


@pytest.fixture(name="testuser")
def testuser_fixture():
    return DEMO_USERS[1]


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(app, admin):
    token = app.state.token_service.issue(admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="testuser_headers")
def testuser_headers_fixture(app, testuser):
    token = app.state.token_service.issue(testuser)
    return {"Authorization": f"Bearer {token}"}
