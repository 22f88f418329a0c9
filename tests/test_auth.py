"""
Tests for registration, login, guest sessions, token verification and
Google sign-in.
"""
import pytest

from app.database import get_db
from app.exceptions import UnauthorizedError
from app.utils.security import GUEST_ROLE, extract_bearer_token


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "asha@example.com", "password": "s3cret!"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "asha@example.com"
        assert body["user"]["name"] == "asha"
        assert body["user"]["role"] == "student"

    def test_duplicate_email_is_rejected(self, client):
        payload = {"email": "dup@example.com", "password": "pw", "name": "Dup"}

        first = client.post("/api/auth/register", json=payload)
        second = client.post("/api/auth/register", json=payload)

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json() == {"error": "User already exists"}

    def test_missing_password_is_a_validation_error(self, client):
        response = client.post("/api/auth/register", json={"email": "x@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email and password are required"}

    def test_password_is_stored_hashed(self, client, db_session):
        from app.models import User

        client.post("/api/auth/register", json={"email": "h@example.com", "password": "plain"})

        user = db_session.query(User).filter(User.email == "h@example.com").one()
        assert user.password != "plain"
        assert user.password.startswith("$2")


class TestLogin:
    def test_login_token_verifies_to_same_user(self, client):
        registered = client.post(
            "/api/auth/register",
            json={"email": "ravi@example.com", "password": "pw123"},
        ).json()

        login = client.post(
            "/api/auth/login",
            json={"email": "ravi@example.com", "password": "pw123"},
        )
        assert login.status_code == 200

        verify = client.post("/api/auth/verify", headers=bearer(login.json()["token"]))

        assert verify.status_code == 200
        user = verify.json()["user"]
        assert user["id"] == registered["user"]["id"]
        assert user["role"] == login.json()["user"]["role"] == "student"

    def test_wrong_password(self, client):
        client.post("/api/auth/register", json={"email": "w@example.com", "password": "right"})

        response = client.post("/api/auth/login", json={"email": "w@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})

        assert response.status_code == 401

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={})

        assert response.status_code == 400


class TestGuest:
    def test_guest_token(self, client):
        response = client.post("/api/auth/guest")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["role"] == GUEST_ROLE
        assert body["user"]["name"] == "Guest"
        assert body["user"]["id"].startswith("guest-")

    def test_guest_verify_skips_database(self, app, client):
        token = client.post("/api/auth/guest").json()["token"]

        class ExplodingSession:
            def __getattr__(self, name):
                raise AssertionError(f"database touched: {name}")

        def no_db():
            yield ExplodingSession()

        app.dependency_overrides[get_db] = no_db
        try:
            response = client.post("/api/auth/verify", headers=bearer(token))
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["user"]["role"] == GUEST_ROLE


class TestVerify:
    def test_missing_header(self, client):
        response = client.post("/api/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_garbage_token(self, client):
        response = client.post("/api/auth/verify", headers=bearer("not-a-jwt"))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, auth_service, student):
        user_id, _ = student
        token = auth_service.create_token(user_id, "student", expires_days=-1)

        response = client.post("/api/auth/verify", headers=bearer(token))

        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}

    def test_token_for_missing_user(self, client, auth_service):
        token = auth_service.create_token("no-such-user", "student")

        response = client.post("/api/auth/verify", headers=bearer(token))

        assert response.status_code == 401
        assert response.json() == {"error": "User not found"}

    def test_token_signed_with_other_secret(self, client, test_settings):
        from app.services.auth_service import AuthService

        foreign = AuthService(test_settings.model_copy(update={"JWT_SECRET": "other"}))
        token = foreign.create_token("someone", "student")

        response = client.post("/api/auth/verify", headers=bearer(token))

        assert response.status_code == 401


class TestGoogle:
    def test_creates_then_reuses_user(self, client):
        payload = {
            "email": "g@example.com",
            "googleId": "google-123",
            "name": "Gita",
            "picture": "https://example.com/g.png",
        }

        first = client.post("/api/auth/google", json=payload)
        second = client.post("/api/auth/google", json=payload)

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["user"]["id"] == second.json()["user"]["id"]
        assert first.json()["user"]["picture"] == "https://example.com/g.png"

    def test_oauth_user_cannot_password_login(self, client):
        client.post("/api/auth/google", json={"email": "o@example.com", "googleId": "g-1"})

        response = client.post("/api/auth/login", json={"email": "o@example.com", "password": ""})
        assert response.status_code == 400

        response = client.post("/api/auth/login", json={"email": "o@example.com", "password": "guess"})
        assert response.status_code == 401

    def test_links_existing_password_account(self, client):
        registered = client.post(
            "/api/auth/register", json={"email": "both@example.com", "password": "pw"}
        ).json()

        google = client.post(
            "/api/auth/google", json={"email": "both@example.com", "googleId": "g-2"}
        ).json()

        assert google["user"]["id"] == registered["user"]["id"]

    def test_requires_google_id(self, client):
        response = client.post("/api/auth/google", json={"email": "g@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email and googleId are required"}


class TestTokenHelpers:
    def test_round_trip(self, auth_service):
        token = auth_service.create_token("u-1", "admin", email="a@example.com")

        identity = auth_service.decode_token(token)

        assert identity.user_id == "u-1"
        assert identity.is_admin
        assert identity.email == "a@example.com"

    def test_tampered_token(self, auth_service):
        token = auth_service.create_token("u-1", "student")
        head, payload, signature = token.split(".")

        with pytest.raises(UnauthorizedError):
            auth_service.decode_token(f"{head}.{payload}.{signature[::-1]}")

    @pytest.mark.parametrize("header,expected", [
        (None, None),
        ("", None),
        ("Bearer abc.def", "abc.def"),
        ("bearer abc", "abc"),
        ("Basic dXNlcjpwdw==", None),
        ("Bearer ", None),
    ])
    def test_extract_bearer_token(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestRegistrationRace:
    def test_losing_insert_is_a_conflict(self, auth_service, other_session, stale_first_lookup, db_session):
        from app.exceptions import ConflictError
        from app.models import User

        other_session.add(User(email="race@example.com", password="x", name="race"))
        other_session.commit()

        with pytest.raises(ConflictError):
            auth_service.register(stale_first_lookup, "race@example.com", "pw", None)

        assert db_session.query(User).filter(User.email == "race@example.com").count() == 1


class TestGoogleIdOwnership:
    def test_google_id_held_by_another_account(self, client):
        client.post("/api/auth/google", json={"email": "first@example.com", "googleId": "g-shared"})
        client.post("/api/auth/register", json={"email": "second@example.com", "password": "pw"})

        linking = client.post("/api/auth/google", json={"email": "second@example.com", "googleId": "g-shared"})
        creating = client.post("/api/auth/google", json={"email": "third@example.com", "googleId": "g-shared"})

        assert linking.status_code == 400
        assert linking.json() == {"error": "Google account already linked to another user"}
        assert creating.status_code == 400

    def test_same_account_can_sign_in_again(self, client):
        payload = {"email": "again@example.com", "googleId": "g-again"}

        assert client.post("/api/auth/google", json=payload).status_code == 200
        assert client.post("/api/auth/google", json=payload).status_code == 200
