# tests/unit/auth/test_auth_service.py
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

import pytest

from wodtracker.auth.config import auth_settings
from wodtracker.auth.line import LineAuthError, LineClient, get_line_client
from wodtracker.auth.schemas import LineProfile, LineToken
from wodtracker.auth.service import (
    generate_unique_username,
    get_user_by_line_id,
    upsert_line_user,
)
from wodtracker.auth.utils import decode_session_token


@pytest.fixture
def line_client(app):
    """Replaces the LINE HTTP client for the callback route."""
    client = AsyncMock(spec=LineClient)
    client.exchange_code.return_value = LineToken(access_token="line-access-token")
    client.get_profile.return_value = LineProfile(
        userId="U4af4980629", displayName="Brown Bear", pictureUrl="https://example.com/b.png"
    )

    async def _override():
        yield client

    app.dependency_overrides[get_line_client] = _override
    return client


# --- Test ID: UTC-22 ---
@pytest.mark.asyncio
class TestLineUserService:
    async def test_first_login_creates_user(self, db_session):
        """UTC-22-TC-01: A new LINE account becomes a local user."""
        profile = LineProfile(userId="U1", displayName="John Doe", pictureUrl="https://x/p.png")

        user = await upsert_line_user(profile, db_session)

        assert len(user.id) == 24
        assert user.username == "johndoe"
        assert user.display_name == "John Doe"
        assert user.profile_picture == "https://x/p.png"
        assert user.created_at is not None
        assert (await get_user_by_line_id("U1", db_session)).id == user.id

    async def test_repeat_login_refreshes_profile(self, db_session):
        """UTC-22-TC-02: A returning account keeps its id and username."""
        first = await upsert_line_user(LineProfile(userId="U1", displayName="John"), db_session)
        again = await upsert_line_user(
            LineProfile(userId="U1", displayName="Johnny", pictureUrl="https://x/new.png"),
            db_session,
        )

        assert again.id == first.id
        assert again.username == "john"
        assert again.display_name == "Johnny"
        assert again.profile_picture == "https://x/new.png"

    async def test_username_collisions_get_suffixes(self, db_session, create_user):
        """UTC-22-TC-03: Taken usernames get 1, 2, ... appended."""
        await create_user("johndoe")
        await create_user("johndoe1")

        assert await generate_unique_username("John Doe", db_session) == "johndoe2"

    async def test_empty_slug_falls_back_to_user(self, db_session):
        """UTC-22-TC-04: Display names with no usable characters become "user"."""
        assert await generate_unique_username("🙂🙂", db_session) == "user"


# --- Test ID: UTC-23 ---
@pytest.mark.asyncio
class TestLineLoginRoutes:
    async def test_login_redirects_with_state_cookie(self, async_client):
        """UTC-23-TC-01: Login sends the browser to LINE with a matching state cookie."""
        response = await async_client.get("/auth/line/login")

        assert response.status_code == 307
        location = urlparse(response.headers["location"])
        query = parse_qs(location.query)
        assert location.netloc == "access.line.me"
        assert query["client_id"] == [auth_settings.LINE_CHANNEL_ID]
        assert query["scope"] == ["profile openid"]
        assert response.cookies[auth_settings.STATE_COOKIE_NAME] == query["state"][0]
        assert "httponly" in response.headers["set-cookie"].lower()

    async def test_callback_success_sets_session(self, async_client, line_client):
        """UTC-23-TC-02: A valid callback creates the user and sets the session cookie."""
        async_client.cookies.set(auth_settings.STATE_COOKIE_NAME, "expected-state")

        response = await async_client.get(
            "/auth/line/callback", params={"code": "auth-code", "state": "expected-state"}
        )

        assert response.status_code == 307
        assert response.headers["location"] == "http://localhost:3000/profile"
        line_client.exchange_code.assert_awaited_once_with("auth-code")
        line_client.get_profile.assert_awaited_once_with("line-access-token")

        payload = decode_session_token(response.cookies[auth_settings.SESSION_COOKIE_NAME])
        assert payload.line_user_id == "U4af4980629"
        assert payload.username == "brownbear"

    async def test_callback_state_mismatch(self, async_client, line_client):
        """UTC-23-TC-03: A state that does not match the cookie is rejected."""
        async_client.cookies.set(auth_settings.STATE_COOKIE_NAME, "expected-state")

        response = await async_client.get(
            "/auth/line/callback", params={"code": "auth-code", "state": "forged"}
        )

        assert response.headers["location"] == "http://localhost:3000/login?error=invalid_state"
        line_client.exchange_code.assert_not_awaited()

    async def test_callback_provider_error(self, async_client, line_client):
        """UTC-23-TC-04: Provider errors are passed through to the login page."""
        response = await async_client.get(
            "/auth/line/callback",
            params={"error": "access_denied", "error_description": "denied"},
        )

        assert response.headers["location"] == (
            "http://localhost:3000/login?error=access_denied&description=denied"
        )

    async def test_callback_missing_code(self, async_client, line_client):
        """UTC-23-TC-05: A callback without a code is rejected."""
        async_client.cookies.set(auth_settings.STATE_COOKIE_NAME, "s")

        response = await async_client.get("/auth/line/callback", params={"state": "s"})

        assert response.headers["location"].endswith("error=no_code")

    async def test_callback_token_exchange_failure(self, async_client, line_client):
        """UTC-23-TC-06: A rejected code redirects with token_exchange_failed."""
        line_client.exchange_code.side_effect = LineAuthError("Token exchange failed")
        async_client.cookies.set(auth_settings.STATE_COOKIE_NAME, "s")

        response = await async_client.get(
            "/auth/line/callback", params={"code": "bad", "state": "s"}
        )

        assert response.headers["location"].endswith("error=token_exchange_failed")

    async def test_callback_profile_failure(self, async_client, line_client):
        """UTC-23-TC-07: Any later failure redirects with server_error."""
        line_client.get_profile.side_effect = LineAuthError("Failed to get LINE profile")
        async_client.cookies.set(auth_settings.STATE_COOKIE_NAME, "s")

        response = await async_client.get(
            "/auth/line/callback", params={"code": "c", "state": "s"}
        )

        assert response.headers["location"].endswith("error=server_error")

    async def test_me_and_logout(self, async_client, create_user, auth_cookies):
        """UTC-23-TC-08: /me reads the session, logout clears the cookie."""
        user = await create_user()
        async_client.cookies.update(auth_cookies(user))

        me = await async_client.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["username"] == user.username

        logout = await async_client.post("/auth/logout")
        assert logout.json() == {"success": True}
        assert f'{auth_settings.SESSION_COOKIE_NAME}=""' in logout.headers["set-cookie"]

    async def test_bearer_header_is_accepted(self, async_client, create_user, auth_cookies):
        """UTC-23-TC-09: The session token also works as a Bearer token."""
        user = await create_user()
        token = auth_cookies(user)[auth_settings.SESSION_COOKIE_NAME]

        response = await async_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["id"] == user.id
