# tests/api/conftest.py
# FastAPI TestClient wired to the in-memory repositories

import pytest
from fastapi.testclient import TestClient

from configapi.main import create_app
from configapi.routers.pages import get_page_service
from configapi.routers.widgets import get_widget_service


@pytest.fixture
def app(page_service, widget_service):
    application = create_app()
    application.dependency_overrides[get_page_service] = lambda: page_service
    application.dependency_overrides[get_widget_service] = lambda: widget_service
    return application


@pytest.fixture
def client(app):
    # raise_server_exceptions=False: unhandled errors come back as 500 responses
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def home(client):
    resp = client.post("/pages", json={"name": "Home", "route": "/", "is_home": True})
    assert resp.status_code == 201
    return resp.json()
