import pytest


class TestLogin:
    def test_login_returns_bearer_token(self, client, alice_id):
        resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["tokenType"] == "Bearer"
        assert body["expiresIn"] == 86400
        assert body["accessToken"]
        assert body["user"] == {"id": alice_id, "email": "alice@example.com", "name": "Alice Johnson"}

    @pytest.mark.parametrize("email, password", [
        ("alice@example.com", "wrong"),
        ("nobody@example.com", "password123"),
    ])
    def test_bad_credentials(self, client, email, password):
        resp = client.post("/auth/login", json={"email": email, "password": password})

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHORIZED"
        assert resp.json()["error"]["message"] == "Invalid email or password"

    def test_missing_field_is_validation_error(self, client):
        resp = client.post("/auth/login", json={"email": "alice@example.com"})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


class TestSession:
    def test_me(self, client, auth_headers, alice_id):
        resp = client.get("/auth/me", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["id"] == alice_id

    def test_logout_invalidates_token(self, client, auth_headers):
        resp = client.post("/auth/logout", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Logged out successfully"}

        again = client.get("/auth/me", headers=auth_headers)
        assert again.status_code == 401
        assert again.json()["error"]["message"] == "Invalid or expired token"

    def test_token_from_login_endpoint_works(self, client):
        token = client.post(
            "/auth/login", json={"email": "bob@example.com", "password": "password456"}
        ).json()["accessToken"]

        resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert resp.json()["email"] == "bob@example.com"
