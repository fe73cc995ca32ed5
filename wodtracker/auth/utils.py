# wodtracker/auth/utils.py
import re
import secrets
from datetime import UTC, datetime, timedelta

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from wodtracker.auth.config import auth_settings
from wodtracker.auth.schemas import SessionPayload
from wodtracker.exceptions import AuthenticationError

_USERNAME_STRIP = re.compile(r"[^a-z0-9]")


def generate_state() -> str:
    """Random value for the anti-forgery cookie and the OAuth state parameter."""
    return secrets.token_hex(16)


def slugify_username(display_name: str) -> str:
    return _USERNAME_STRIP.sub("", display_name.lower())


def create_session_token(payload: SessionPayload) -> str:
    to_encode = payload.model_dump()
    expire = datetime.now(UTC) + timedelta(days=auth_settings.SESSION_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode, auth_settings.JWT_SECRET, algorithm=auth_settings.JWT_ALGORITHM
    )


def decode_session_token(token: str) -> SessionPayload:
    """
    Decodes a session token, raising AuthenticationError when it has expired,
    was tampered with or does not carry the session claims.
    """
    try:
        payload = jwt.decode(
            token, auth_settings.JWT_SECRET, algorithms=[auth_settings.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Session has expired") from None
    except InvalidTokenError:
        raise AuthenticationError("Invalid authentication token") from None

    try:
        return SessionPayload.model_validate(payload)
    except ValueError:
        raise AuthenticationError("Invalid authentication token") from None
