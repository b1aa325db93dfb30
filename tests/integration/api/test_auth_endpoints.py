"""Integration tests for authentication endpoints."""

import json

import pytest
from httpx import AsyncClient

from edugate_identity.infrastructure.persistence.sqlalchemy import IdentityBase

SESSION_COOKIE = "edugate_session"


class TestRegister:
    """Tests for POST /api/register."""

    async def test_register_success(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 200
        assert response.json() == {"message": "register_complete"}

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("name", "A1"),
            ("lastName", "Kowalska Nowak"),
            ("email", "not-an-email"),
            ("login", "an"),
            ("password", "password"),
            ("role", ""),
        ],
    )
    async def test_invalid_field_is_bad_data(
        self,
        test_client: AsyncClient,
        api_prefix: str,
        registration_payload: dict,
        field: str,
        value: str,
    ):
        registration_payload[field] = value

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_rejected_registration_stores_nothing(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        """A rejected attempt leaves the login free."""
        bad = {**registration_payload, "password": "weak"}
        await test_client.post(f"{api_prefix}/register", json=bad)

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.json() == {"message": "register_complete"}

    async def test_malformed_school_id(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        registration_payload["schoolId"] = "12345"

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_school"}

    async def test_unknown_school(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        registration_payload["schoolId"] = "0000000000"

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_school"}

    async def test_duplicate_login(
        self,
        test_client: AsyncClient,
        api_prefix: str,
        registered_user: dict,
    ):
        payload = {**registered_user, "email": "other@b.com"}

        response = await test_client.post(f"{api_prefix}/register", json=payload)

        assert response.status_code == 409
        assert response.json() == {"message": "login_exists"}

    async def test_duplicate_email(
        self,
        test_client: AsyncClient,
        api_prefix: str,
        registered_user: dict,
    ):
        payload = {**registered_user, "login": "annak2"}

        response = await test_client.post(f"{api_prefix}/register", json=payload)

        assert response.status_code == 409
        assert response.json() == {"message": "email_exists"}

    async def test_missing_field_is_bad_data(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        del registration_payload["email"]

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_wrong_type_is_bad_data(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        registration_payload["login"] = 12345

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_unencodable_password_is_bad_data(
        self, test_client: AsyncClient, api_prefix: str, registration_payload: dict
    ):
        """A lone surrogate survives JSON decoding but has no UTF-8 form."""
        body = json.dumps({**registration_payload, "password": "Passw0rd!\ud800"})

        response = await test_client.post(
            f"{api_prefix}/register",
            content=body.encode("ascii"),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_database_failure_is_server_error(
        self,
        test_client: AsyncClient,
        test_db_engine,
        api_prefix: str,
        registration_payload: dict,
    ):
        async with test_db_engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.drop_all)

        response = await test_client.post(
            f"{api_prefix}/register", json=registration_payload
        )

        assert response.status_code == 500
        assert response.json() == {"message": "server_error"}


class TestLogin:
    """Tests for POST /api/login."""

    async def test_login_returns_profile(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "Anna"
        assert data["lastName"] == "Kowalska"
        assert data["login"] == "annak"
        assert data["email"] == "a@b.com"
        assert data["schoolId"] == "1234567890"
        assert data["role"] == "student"
        assert data["status"] == "active"
        assert data["photoURL"] is None
        assert data["language"] is None
        assert data["theme"] is None
        assert data["userId"]

        assert SESSION_COOKIE in response.cookies

    async def test_login_never_returns_password(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )

        body = response.text
        assert "Passw0rd!" not in body
        assert "$2b$" not in body
        assert "password" not in response.json()

    async def test_session_cookie_attributes(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "path=/api" in set_cookie
        assert "max-age=86400" in set_cookie

    async def test_wrong_password(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd?"},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "bad_data"}
        assert SESSION_COOKIE not in response.cookies

    async def test_unknown_login_matches_wrong_password(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        unknown = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "nobody", "password": "Passw0rd!"},
        )
        wrong = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd?"},
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {"message": "bad_data"}

    async def test_malformed_login_is_bad_request(
        self, test_client: AsyncClient, api_prefix: str
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "a", "password": "x"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_unencodable_password_is_bad_request(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        response = await test_client.post(
            f"{api_prefix}/login",
            content=b'{"login": "annak", "password": "Passw0rd!\\ud800"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}

    async def test_missing_body_is_bad_request(
        self, test_client: AsyncClient, api_prefix: str
    ):
        response = await test_client.post(f"{api_prefix}/login")

        assert response.status_code == 400
        assert response.json() == {"message": "bad_data"}


class TestSessionLifecycle:
    """Tests for GET /api/checkSession and GET /api/logout."""

    async def test_check_session_without_login_is_null(
        self, test_client: AsyncClient, api_prefix: str
    ):
        response = await test_client.get(f"{api_prefix}/checkSession")

        assert response.status_code == 200
        assert response.json() is None

    async def test_check_session_with_unknown_cookie_is_null(
        self, test_client: AsyncClient, api_prefix: str
    ):
        response = await test_client.get(
            f"{api_prefix}/checkSession",
            headers={"Cookie": f"{SESSION_COOKIE}=forged"},
        )

        assert response.status_code == 200
        assert response.json() is None

    async def test_full_session_lifecycle(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        login = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )
        assert login.status_code == 200

        check = await test_client.get(f"{api_prefix}/checkSession")
        assert check.status_code == 200
        assert check.json() == login.json()

        logout = await test_client.get(f"{api_prefix}/logout")
        assert logout.status_code == 200
        assert logout.json() == {"message": "logout_success"}

        after = await test_client.get(f"{api_prefix}/checkSession")
        assert after.json() is None

    async def test_old_session_is_dead_after_logout(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        """Replaying the old cookie after logout yields no session."""
        login = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )
        session_id = login.cookies[SESSION_COOKIE]

        await test_client.get(f"{api_prefix}/logout")
        test_client.cookies.clear()

        replay = await test_client.get(
            f"{api_prefix}/checkSession",
            headers={"Cookie": f"{SESSION_COOKIE}={session_id}"},
        )
        assert replay.json() is None

    async def test_login_replaces_previous_session(
        self, test_client: AsyncClient, api_prefix: str, registered_user: dict
    ):
        first = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )
        first_id = first.cookies[SESSION_COOKIE]

        second = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )
        assert second.cookies[SESSION_COOKIE] != first_id
        test_client.cookies.clear()

        replay = await test_client.get(
            f"{api_prefix}/checkSession",
            headers={"Cookie": f"{SESSION_COOKIE}={first_id}"},
        )
        assert replay.json() is None

    async def test_logout_without_session_succeeds(
        self, test_client: AsyncClient, api_prefix: str
    ):
        response = await test_client.get(f"{api_prefix}/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "logout_success"}


class TestEndToEnd:
    """Register then login with the front end's example user."""

    async def test_register_then_login(self, test_client: AsyncClient, api_prefix: str):
        register = await test_client.post(
            f"{api_prefix}/register",
            json={
                "schoolId": "1234567890",
                "name": "Anna",
                "lastName": "Kowalska",
                "login": "annak",
                "password": "Passw0rd!",
                "email": "a@b.com",
                "role": "student",
                "status": "active",
            },
        )
        assert register.json() == {"message": "register_complete"}

        login = await test_client.post(
            f"{api_prefix}/login",
            json={"login": "annak", "password": "Passw0rd!"},
        )

        assert login.status_code == 200
        data = login.json()
        assert (data["firstName"], data["lastName"]) == ("Anna", "Kowalska")
        assert (data["login"], data["email"]) == ("annak", "a@b.com")
        assert (data["schoolId"], data["role"], data["status"]) == (
            "1234567890",
            "student",
            "active",
        )


class TestHealth:
    """Tests for GET /health."""

    async def test_health(self, test_client: AsyncClient):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
