# wodtracker/auth/service.py
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.models import User
from wodtracker.auth.schemas import LineProfile, SessionPayload
from wodtracker.auth.utils import create_session_token, slugify_username

logger = logging.getLogger(__name__)


async def get_user_by_line_id(line_user_id: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(User.line_user_id == line_user_id))
    return result.scalars().first()


async def is_username_taken(
    username: str, db: AsyncSession, exclude_user_id: str | None = None
) -> bool:
    query = select(User.id).where(User.username == username.lower())
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query)
    return result.first() is not None


async def generate_unique_username(display_name: str, db: AsyncSession) -> str:
    base = slugify_username(display_name) or "user"
    username = base
    suffix = 1
    while await is_username_taken(username, db):
        username = f"{base}{suffix}"
        suffix += 1
    return username


async def upsert_line_user(profile: LineProfile, db: AsyncSession) -> User:
    """Create the local user on first login, otherwise refresh the LINE profile fields."""
    user = await get_user_by_line_id(profile.userId, db)

    if user is None:
        username = await generate_unique_username(profile.displayName, db)
        user = User(
            line_user_id=profile.userId,
            username=username,
            display_name=profile.displayName,
            profile_picture=profile.pictureUrl or "",
        )
        db.add(user)
        logger.info("Creating user %s for LINE account %s", username, profile.userId)
    else:
        user.display_name = profile.displayName
        if profile.pictureUrl:
            user.profile_picture = profile.pictureUrl

    await db.commit()
    await db.refresh(user)
    return user


def issue_session_token(user: User) -> str:
    return create_session_token(
        SessionPayload(
            user_id=user.id, line_user_id=user.line_user_id, username=user.username
        )
    )
