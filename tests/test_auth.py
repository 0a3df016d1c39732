"""Signup, sign-in, profile and the bearer-token gate."""

from weighin.core.security import create_access_token

API = "/api/v1"


class TestSignup:
    def test_signup_success(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={"name": "Carol", "email": "Carol@Weighin.dev", "password": "secret123"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Carol"
        assert data["email"] == "carol@weighin.dev"
        assert data["is_first_login"] is True
        assert "password" not in data and "password_hash" not in data

    def test_signup_duplicate_email(self, client, alice):
        response = client.post(
            f"{API}/auth/signup",
            json={"name": "Alice Two", "email": "alice@weighin.dev", "password": "secret123"},
        )
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_signup_invalid_payload(self, client):
        response = client.post(
            f"{API}/auth/signup",
            json={"name": "A", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request data"


class TestSignin:
    def test_wrong_password(self, client, alice):
        response = client.post(
            f"{API}/auth/signin", json={"email": "alice@weighin.dev", "password": "wrong-one"}
        )
        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post(
            f"{API}/auth/signin", json={"email": "nobody@weighin.dev", "password": "secret123"}
        )
        assert response.status_code == 401


class TestGate:
    def test_missing_token(self, client):
        assert client.get(f"{API}/weight").status_code == 401

    def test_garbage_token(self, client):
        response = client.get(f"{API}/weight", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_token_for_unknown_user(self, client):
        token = create_access_token("00000000-0000-0000-0000-000000000042")
        response = client.get(f"{API}/goals", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestProfile:
    def test_get_and_update_profile(self, client, alice):
        response = client.get(f"{API}/user/profile", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["is_first_login"] is True

        response = client.put(
            f"{API}/user/profile", json={"is_first_login": False}, headers=alice["headers"]
        )
        assert response.status_code == 200
        assert response.json()["is_first_login"] is False
        assert client.get(f"{API}/user/profile", headers=alice["headers"]).json()["is_first_login"] is False


class TestUserDiscovery:
    def test_search_excludes_self(self, client, alice, bob):
        response = client.get(f"{API}/users/search", params={"q": "b"}, headers=alice["headers"])
        assert response.status_code == 200
        names = [u["name"] for u in response.json()["users"]]
        assert names == ["Bob"]

        response = client.get(f"{API}/users/search", params={"q": "alice"}, headers=alice["headers"])
        assert response.json()["users"] == []

    def test_search_empty_query(self, client, alice):
        response = client.get(f"{API}/users/search", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json() == {"users": []}

    def test_available_users_excludes_linked(self, client, make_user, alice, bob):
        carol = make_user("Carol")
        response = client.get(f"{API}/users", headers=alice["headers"])
        assert [u["name"] for u in response.json()] == ["Bob", "Carol"]

        client.post(f"{API}/partners", json={"partner_id": bob["id"]}, headers=alice["headers"])
        response = client.get(f"{API}/users", headers=alice["headers"])
        assert [u["id"] for u in response.json()] == [carol["id"]]
