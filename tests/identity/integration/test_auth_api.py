"""Integration tests for the auth endpoints."""


class TestSignUpEndpoint:
    def test_sign_up_returns_token_and_user(self, client):
        response = client.post(
            "/auth/signup",
            json={"name": "Jane Shopper", "email": "jane@example.com", "password": "secret-pass"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "jane@example.com"
        assert body["user"]["role"] == "user"

    def test_duplicate_email_is_a_validation_error(self, client, customer):
        response = client.post(
            "/auth/signup",
            json={"name": "Jane Shopper", "email": "jane@example.com", "password": "secret-pass"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Email already registered"


class TestLoginEndpoint:
    def test_login_returns_working_token(self, client, customer):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "secret-pass"})
        assert response.status_code == 200

        token = response.json()["token"]
        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["id"] == str(customer.id)

    def test_bad_credentials_are_rejected(self, client, customer):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json()["error"] == {
            "kind": "authentication",
            "message": "Invalid credentials",
            "details": None,
        }


class TestMeEndpoint:
    def test_me_requires_a_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Not authenticated"

    def test_me_with_invalid_token_is_unauthenticated(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
