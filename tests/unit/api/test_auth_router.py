"""HTTP tests for /api/v1/auth/login."""

from typing import Any

from fastapi.testclient import TestClient

LOGIN = "/api/v1/auth/login"


class TestLogin:
    def test_login_returns_token(self, client: TestClient, registration_payload: dict[str, Any], auth_headers):
        response = client.post(
            LOGIN,
            json={
                "username": registration_payload["email"],
                "password": registration_payload["password"],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["customer"]["email"] == registration_payload["email"]
        assert response.headers["Authorization"] == body["token"]

        # The new token authenticates protected routes
        listing = client.get(
            "/api/v1/customers", headers={"Authorization": f"Bearer {body['token']}"}
        )
        assert listing.status_code == 200

    def test_wrong_password(self, client: TestClient, registration_payload: dict[str, Any], auth_headers):
        response = client.post(
            LOGIN, json={"username": registration_payload["email"], "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Bad credentials"

    def test_unknown_user(self, client: TestClient):
        response = client.post(LOGIN, json={"username": "ghost@example.com", "password": "x"})

        assert response.status_code == 401
        assert response.json()["message"] == "Bad credentials"
