# wodtracker/auth/line.py
import logging
from typing import AsyncGenerator
from urllib.parse import urlencode

import httpx

from wodtracker.auth.config import auth_settings
from wodtracker.auth.schemas import LineProfile, LineToken

logger = logging.getLogger(__name__)


class LineAuthError(Exception):
    """The identity provider rejected a request."""


class LineClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @staticmethod
    def authorize_url(state: str, nonce: str) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": auth_settings.LINE_CHANNEL_ID,
                "redirect_uri": auth_settings.LINE_REDIRECT_URI,
                "state": state,
                "scope": "profile openid",
                "nonce": nonce,
            }
        )
        return f"{auth_settings.LINE_AUTHORIZE_URL}?{query}"

    async def exchange_code(self, code: str) -> LineToken:
        response = await self.http.post(
            auth_settings.LINE_TOKEN_URL,
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": auth_settings.LINE_REDIRECT_URI,
                "client_id": auth_settings.LINE_CHANNEL_ID,
                "client_secret": auth_settings.LINE_CHANNEL_SECRET,
            },
        )
        if response.is_error:
            logger.warning(
                "LINE token exchange failed (%s): %s", response.status_code, response.text
            )
            raise LineAuthError("Token exchange failed")
        return LineToken.model_validate(response.json())

    async def get_profile(self, access_token: str) -> LineProfile:
        response = await self.http.get(
            auth_settings.LINE_PROFILE_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.is_error:
            logger.warning("LINE profile request failed (%s)", response.status_code)
            raise LineAuthError("Failed to get LINE profile")
        return LineProfile.model_validate(response.json())


async def get_line_client() -> AsyncGenerator[LineClient, None]:
    async with httpx.AsyncClient() as http:
        yield LineClient(http)
