# wodtracker/analytics/service.py
import logging
from datetime import datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.models import User
from wodtracker.scores.models import Score

from .engine import compute_user_stats, get_stats_timezone
from .schemas import ScoreEntry, StatsReport

logger = logging.getLogger(__name__)


async def get_score_entries(user_id: str, db: AsyncSession) -> list[ScoreEntry]:
    result = await db.execute(
        select(Score).where(Score.user_id == user_id).order_by(desc(Score.date))
    )
    return [ScoreEntry.model_validate(score) for score in result.scalars().all()]


async def get_user_stats(
    user_id: str, db: AsyncSession, now: datetime | None = None
) -> StatsReport:
    entries = await get_score_entries(user_id, db)
    return compute_user_stats(entries, now=now, tz=get_stats_timezone())


async def refresh_cached_stats(user_id: str, db: AsyncSession) -> User | None:
    """
    Recompute the aggregate counters stored on the user row.

    Pending score changes are flushed first so they count. Nothing is
    committed here: the caller commits the score write and the counters
    together.
    """
    user = await db.get(User, user_id)
    if user is None:
        return None

    await db.flush()
    entries = await get_score_entries(user_id, db)
    report = compute_user_stats(entries, tz=get_stats_timezone())

    user.total_workouts = report.total_workouts
    user.current_streak = report.current_streak
    user.longest_streak = report.longest_streak
    user.last_workout_date = entries[0].date if entries else None

    logger.debug("Cached stats recomputed for user %s", user_id)
    return user
