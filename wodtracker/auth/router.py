# wodtracker/auth/router.py
import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.config import auth_settings
from wodtracker.auth.dependencies import get_current_user
from wodtracker.auth.line import LineAuthError, LineClient, get_line_client
from wodtracker.auth.models import User
from wodtracker.auth.schemas import AuthUserRead
from wodtracker.auth.service import issue_session_token, upsert_line_user
from wodtracker.auth.utils import generate_state
from wodtracker.config import settings
from wodtracker.database import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter()

COOKIE_SETTINGS = {
    "path": "/",
    "httponly": True,
    "samesite": "lax",
}


def _login_redirect(error: str, **extra: str) -> RedirectResponse:
    query = urlencode({"error": error, **extra})
    return RedirectResponse(f"{settings.APP_URL}/login?{query}")


@router.get("/line/login")
async def line_login():
    state = generate_state()
    nonce = generate_state()

    response = RedirectResponse(LineClient.authorize_url(state, nonce))
    response.set_cookie(
        key=auth_settings.STATE_COOKIE_NAME,
        value=state,
        max_age=auth_settings.STATE_COOKIE_MAX_AGE,
        secure=auth_settings.COOKIE_SECURE,
        **COOKIE_SETTINGS,
    )
    return response


@router.get("/line/callback")
async def line_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
    line: LineClient = Depends(get_line_client),
    db: AsyncSession = Depends(get_async_session),
):
    if error:
        logger.warning("LINE auth error: %s %s", error, error_description)
        return _login_redirect(error, description=error_description or "")

    stored_state = request.cookies.get(auth_settings.STATE_COOKIE_NAME)
    if not state or not stored_state or state != stored_state:
        logger.warning("LINE auth state mismatch")
        return _login_redirect("invalid_state")

    if not code:
        return _login_redirect("no_code")

    try:
        token = await line.exchange_code(code)
    except LineAuthError:
        return _login_redirect("token_exchange_failed")

    try:
        profile = await line.get_profile(token.access_token)
        user = await upsert_line_user(profile, db)
    except Exception:
        logger.exception("LINE callback failed")
        return _login_redirect("server_error")

    response = RedirectResponse(f"{settings.APP_URL}/profile")
    response.set_cookie(
        key=auth_settings.SESSION_COOKIE_NAME,
        value=issue_session_token(user),
        max_age=auth_settings.SESSION_EXPIRE_DAYS * 24 * 3600,
        secure=auth_settings.COOKIE_SECURE,
        **COOKIE_SETTINGS,
    )
    response.delete_cookie(auth_settings.STATE_COOKIE_NAME, path="/")
    logger.info("User %s logged in", user.id)
    return response


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(auth_settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me", response_model=AuthUserRead)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user
