"""Pytest fixtures shared by the test suite.

Route tests run against the real FastAPI app with the store dependency
overridden by in-memory repositories. The lifespan is never entered (the
TestClient is not used as a context manager), so no database is needed.
"""
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from dependencies import get_store
from fakes import make_store
from main import create_app


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def app(store):
    application = create_app(Settings())
    application.dependency_overrides[get_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_person(client):
    def _make(name="John Doe", email="john@example.com", picture=""):
        resp = client.post("/api/v1/persons", json={"name": name, "email": email, "picture": picture})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_team(client):
    def _make(name="Dev Team", logo=""):
        resp = client.post("/api/v1/teams", json={"name": name, "logo": logo})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
