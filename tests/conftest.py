import pytest
from fastapi.testclient import TestClient

from botkeeper.main import app
from botkeeper.db.store import open_store, close_store


@pytest.fixture(autouse=True)
def store(tmp_path):
    """Fresh users file per test."""
    close_store()
    opened = open_store(tmp_path / "users.json")
    yield opened
    close_store()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def registered(client):
    """Register the example account and return its email."""
    response = client.post("/register", json={
        "username": "ann",
        "email": "a@x.com",
        "password": "pw123",
        "confirmPassword": "pw123",
    })
    assert response.status_code == 201
    return "a@x.com"
