from datetime import datetime, timedelta

from shuvodin.models import UserSession
from tests.helpers import DEFAULT_PASSWORD, signup


class TestSignup:
    def test_signup_returns_session_token(self, client):
        response = client.post(
            "/auth/signup",
            json={
                "email": "Nadia@Example.com",
                "username": "Nadia_R",
                "name": "Nadia Rahman",
                "password": DEFAULT_PASSWORD,
                "confirmPassword": DEFAULT_PASSWORD,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["username"] == "nadia_r"

        account = client.get("/settings/account", headers={"Authorization": f"Bearer {body['token']}"})
        assert account.json()["email"] == "nadia@example.com"
        assert account.json()["roles"] == ["user"]
        assert account.json()["hasPassword"] is True

    def test_duplicate_username_conflicts(self, client):
        signup(client, "rahim")
        response = client.post(
            "/auth/signup",
            json={
                "email": "other@example.com",
                "username": "RAHIM",
                "password": DEFAULT_PASSWORD,
                "confirmPassword": DEFAULT_PASSWORD,
            },
        )
        assert response.status_code == 409

    def test_duplicate_email_conflicts(self, client):
        signup(client, "rahim", email="same@example.com")
        response = client.post(
            "/auth/signup",
            json={
                "email": "same@example.com",
                "username": "another",
                "password": DEFAULT_PASSWORD,
                "confirmPassword": DEFAULT_PASSWORD,
            },
        )
        assert response.status_code == 409

    def test_password_mismatch_is_rejected(self, client):
        response = client.post(
            "/auth/signup",
            json={
                "email": "a@example.com",
                "username": "abc",
                "password": DEFAULT_PASSWORD,
                "confirmPassword": "something-else",
            },
        )
        assert response.status_code == 422

    def test_password_up_to_one_hundred_characters_is_accepted(self, client):
        password = "p" * 100
        signup(client, "longpass", password=password)

        response = client.post("/auth/login", json={"username": "longpass", "password": password})
        assert response.status_code == 200

    def test_password_over_one_hundred_characters_is_rejected(self, client):
        password = "p" * 101
        response = client.post(
            "/auth/signup",
            json={
                "email": "long@example.com",
                "username": "longpass",
                "password": password,
                "confirmPassword": password,
            },
        )
        assert response.status_code == 422

    def test_invalid_username_is_rejected(self, client):
        response = client.post(
            "/auth/signup",
            json={
                "email": "a@example.com",
                "username": "no spaces!",
                "password": DEFAULT_PASSWORD,
                "confirmPassword": DEFAULT_PASSWORD,
            },
        )
        assert response.status_code == 422


class TestLogin:
    def test_login_with_username_or_email(self, client):
        signup(client, "rahim")

        by_username = client.post("/auth/login", json={"username": "Rahim", "password": DEFAULT_PASSWORD})
        by_email = client.post(
            "/auth/login", json={"username": "rahim@example.com", "password": DEFAULT_PASSWORD}
        )

        assert by_username.status_code == 200
        assert by_email.status_code == 200
        assert by_username.json()["token"] != by_email.json()["token"]

    def test_wrong_password(self, client):
        signup(client, "rahim")
        response = client.post("/auth/login", json={"username": "rahim", "password": "wrong-password"})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/auth/login", json={"username": "ghost", "password": DEFAULT_PASSWORD})
        assert response.status_code == 401


class TestSessions:
    def test_protected_route_without_token(self, client):
        response = client.get("/settings/account")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_bogus_token(self, client):
        response = client.get("/settings/account", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_logout_invalidates_token(self, client, user_headers):
        assert client.post("/auth/logout", headers=user_headers).status_code == 200
        assert client.get("/settings/account", headers=user_headers).status_code == 401

    def test_expired_session_is_rejected_and_removed(self, client, db, user_headers):
        token = user_headers["Authorization"].split(" ", 1)[1]
        session = db.query(UserSession).filter(UserSession.token == token).one()
        session.expires_at = datetime.utcnow() - timedelta(minutes=1)
        db.commit()

        assert client.get("/settings/account", headers=user_headers).status_code == 401
        assert db.query(UserSession).filter(UserSession.token == token).first() is None
