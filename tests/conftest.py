"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from userhub_api.config import Settings, get_settings
from userhub_api.main import app
from userhub_api.services import reset_services_cache

TEST_PASSWORD = "correct-horse-battery"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests that exercise the full app"
    )


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: in-memory store and cheap bcrypt."""
    return Settings(
        _env_file=None,
        environment="test",
        user_store_backend="memory",
        password_hash_rounds=4,
        jwt_secret_key="test-secret-key-that-is-long-enough-for-hs256",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Create a FastAPI test client backed by a fresh in-memory store."""
    reset_services_cache()
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
    reset_services_cache()


@pytest.fixture
def register(client: TestClient):
    """Register a user and return the envelope ``data``."""

    def _register(email: str = "jane@example.com", password: str = TEST_PASSWORD, name: str | None = "Jane") -> dict:
        response = client.post("/users/register", json={"email": email, "password": password, "name": name})
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def auth_headers(client: TestClient, register) -> dict[str, str]:
    """Authorization header for a freshly registered user."""
    register()
    response = client.post("/users/login", json={"email": "jane@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}
