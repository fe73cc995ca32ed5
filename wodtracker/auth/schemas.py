# wodtracker/auth/schemas.py
from pydantic import BaseModel, ConfigDict


class SessionPayload(BaseModel):
    user_id: str
    line_user_id: str
    username: str


class LineProfile(BaseModel):
    userId: str
    displayName: str
    pictureUrl: str | None = None
    statusMessage: str | None = None


class LineToken(BaseModel):
    access_token: str
    id_token: str | None = None
    expires_in: int | None = None


class AuthUserRead(BaseModel):
    id: str
    username: str
    display_name: str
    profile_picture: str | None = None

    model_config = ConfigDict(from_attributes=True)
