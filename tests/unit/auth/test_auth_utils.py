# tests/unit/auth/test_auth_utils.py
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from wodtracker.auth.config import auth_settings
from wodtracker.auth.dependencies import ensure_owner
from wodtracker.auth.schemas import SessionPayload
from wodtracker.auth.utils import (
    create_session_token,
    decode_session_token,
    generate_state,
    slugify_username,
)
from wodtracker.exceptions import AuthenticationError, AuthorizationError

PAYLOAD = SessionPayload(user_id="a" * 24, line_user_id="U123", username="athlete")


# --- Test ID: UTC-20 ---
class TestSessionTokens:
    def test_create_and_decode_token_success(self):
        """UTC-20-TC-01: A fresh session token decodes to the same claims."""
        token = create_session_token(PAYLOAD)

        assert isinstance(token, str)
        assert len(token.split(".")) == 3
        assert decode_session_token(token) == PAYLOAD

    def test_token_expires_after_seven_days(self):
        """UTC-20-TC-02: The exp claim is SESSION_EXPIRE_DAYS ahead."""
        token = create_session_token(PAYLOAD)
        claims = jwt.decode(token, auth_settings.JWT_SECRET, algorithms=[auth_settings.JWT_ALGORITHM])

        expected = datetime.now(UTC) + timedelta(days=auth_settings.SESSION_EXPIRE_DAYS)
        assert abs(claims["exp"] - expected.timestamp()) < 60

    def test_expired_token(self):
        """UTC-20-TC-03: An expired token is an authentication error."""
        expired = jwt.encode(
            {**PAYLOAD.model_dump(), "exp": datetime.now(UTC) - timedelta(minutes=1)},
            auth_settings.JWT_SECRET,
            algorithm=auth_settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_session_token(expired)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Session has expired"

    def test_tampered_token(self):
        """UTC-20-TC-04: A token signed with another key is rejected."""
        forged = jwt.encode(PAYLOAD.model_dump(), "x" * 40, algorithm="HS256")

        with pytest.raises(AuthenticationError) as exc_info:
            decode_session_token(forged)

        assert exc_info.value.detail == "Invalid authentication token"

    def test_token_without_session_claims(self):
        """UTC-20-TC-05: A valid signature without the session claims is rejected."""
        token = jwt.encode({"sub": "someone"}, auth_settings.JWT_SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError):
            decode_session_token(token)


# --- Test ID: UTC-21 ---
class TestAuthHelpers:
    def test_generate_state(self):
        """UTC-21-TC-01: State values are 32 hex characters and unique."""
        state = generate_state()
        assert len(state) == 32
        int(state, 16)
        assert state != generate_state()

    @pytest.mark.parametrize(
        "display_name, expected",
        [("John Doe", "johndoe"), ("Ana_María-99", "anamara99"), ("太郎", "")],
    )
    def test_slugify_username(self, display_name, expected):
        """UTC-21-TC-02: Only lowercase ASCII letters and digits are kept."""
        assert slugify_username(display_name) == expected

    def test_ensure_owner(self):
        """UTC-21-TC-03: Ownership compares normalized ids."""
        ensure_owner("ABCDEF" + "0" * 18, "abcdef" + "0" * 18)

        with pytest.raises(AuthorizationError) as exc_info:
            ensure_owner("a" * 24, "b" * 24, "Nope")
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Nope"

        with pytest.raises(AuthorizationError):
            ensure_owner(None, "b" * 24)
