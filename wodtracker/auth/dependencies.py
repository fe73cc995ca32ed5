# wodtracker/auth/dependencies.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.config import auth_settings
from wodtracker.auth.models import User
from wodtracker.auth.schemas import SessionPayload
from wodtracker.auth.utils import decode_session_token
from wodtracker.database import get_async_session
from wodtracker.exceptions import AuthenticationError, AuthorizationError

bearer_scheme = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request, credentials: HTTPAuthorizationCredentials | None
) -> str | None:
    token = request.cookies.get(auth_settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


async def get_session_payload(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionPayload:
    token = _extract_token(request, credentials)
    if not token:
        raise AuthenticationError("No token provided")
    return decode_session_token(token)


async def get_current_user(
    payload: SessionPayload = Depends(get_session_payload),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    user = await db.get(User, payload.user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


async def get_optional_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> User | None:
    token = _extract_token(request, credentials)
    if not token:
        return None

    try:
        payload = decode_session_token(token)
    except AuthenticationError:
        return None
    return await db.get(User, payload.user_id)


def ensure_owner(owner_id: str | None, user_id: str, message: str = "Forbidden") -> None:
    """Ownership is exact equality of normalized ids."""
    if owner_id is None or owner_id.strip().lower() != user_id.strip().lower():
        raise AuthorizationError(message)
