import pytest
from fastapi.testclient import TestClient

from bankapp.api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def register(client, password):
    """Register through the API; returns (user_id, auth headers)."""

    def _register(email: str = "ada@example.com") -> tuple[str, dict]:
        r = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "firstName": "Ada", "lastName": "Lovelace"},
        )
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}

    return _register
