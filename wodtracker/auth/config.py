# wodtracker/auth/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 7

    SESSION_COOKIE_NAME: str = "auth-token"
    STATE_COOKIE_NAME: str = "line_auth_state"
    STATE_COOKIE_MAX_AGE: int = 10 * 60
    COOKIE_SECURE: bool = False

    LINE_CHANNEL_ID: str
    LINE_CHANNEL_SECRET: str
    LINE_REDIRECT_URI: str
    LINE_AUTHORIZE_URL: str = "https://access.line.me/oauth2/v2.1/authorize"
    LINE_TOKEN_URL: str = "https://api.line.me/oauth2/v2.1/token"
    LINE_PROFILE_URL: str = "https://api.line.me/v2/profile"

    @field_validator("JWT_SECRET")
    def validate_jwt_secret(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters long")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


auth_settings = AuthSettings()
