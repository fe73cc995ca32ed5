# wodtracker/scores/service.py
import logging
from datetime import UTC, datetime
from typing import Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.analytics.engine import as_utc, get_stats_timezone, month_bounds
from wodtracker.analytics.service import refresh_cached_stats
from wodtracker.auth.dependencies import ensure_owner
from wodtracker.auth.models import User
from wodtracker.exceptions import NotFoundError, ValidationError
from wodtracker.pagination import Pagination
from wodtracker.wods.service import get_visible_wod

from .models import Score
from .schemas import ScoreCreate, ScoreUpdate

logger = logging.getLogger(__name__)


async def _commit_with_stats(user_id: str, db: AsyncSession) -> None:
    # Score write and cached counters land in one transaction
    user = await refresh_cached_stats(user_id, db)
    await db.commit()
    if user is not None:
        await db.refresh(user)


async def create_score(user: User, score: ScoreCreate, db: AsyncSession) -> Score:
    wod = await get_visible_wod(score.wod_id, user, db)

    performance = score.performance
    if performance.scoring_type is not None and performance.scoring_type.value != wod.scoring_type:
        raise ValidationError(
            f"Scoring type '{performance.scoring_type.value}' does not match "
            f"the WOD's scoring type '{wod.scoring_type}'"
        )

    db_score = Score(
        user_id=user.id,
        wod_id=wod.id,
        # Snapshot of the WOD at recording time
        wod_name=wod.name,
        scoring_type=wod.scoring_type,
        score=performance.score,
        score_value=performance.score_value or 0,
        rxd=performance.rxd,
        scaled=performance.scaled,
        date=as_utc(score.details.date or datetime.now(UTC)),
        notes=score.details.notes,
        feeling_rating=score.details.feeling_rating,
    )
    db.add(db_score)
    await _commit_with_stats(user.id, db)
    await db.refresh(db_score)
    logger.info(
        "Score created: %s for WOD %s by %s", db_score.id, wod.id, user.id,
        extra={"user_id": user.id, "wod_id": wod.id, "score_id": db_score.id},
    )
    return db_score


async def list_scores(
    user_id: str, db: AsyncSession, page: int = 1, limit: int = 20
) -> tuple[Sequence[Score], Pagination]:
    skip = (page - 1) * limit
    result = await db.execute(
        select(Score)
        .where(Score.user_id == user_id)
        .order_by(desc(Score.date))
        .offset(skip)
        .limit(limit)
    )
    total = await db.scalar(
        select(func.count(Score.id)).where(Score.user_id == user_id)
    )
    return result.scalars().all(), Pagination.build(page, limit, total or 0)


async def list_user_scores(
    user_id: str, db: AsyncSession, month: str | None = None, limit: int = 50
) -> Sequence[Score]:
    """Most recent first, optionally restricted to one "YYYY-MM" calendar month."""
    query = select(Score).where(Score.user_id == user_id)

    if month:
        year, month_number = (int(part) for part in month.split("-"))
        start, end = month_bounds(year, month_number, get_stats_timezone())
        query = query.where(Score.date >= start, Score.date < end)

    result = await db.execute(query.order_by(desc(Score.date)).limit(limit))
    return result.scalars().all()


async def get_score(user_id: str, score_id: str, db: AsyncSession) -> Score:
    score = await db.get(Score, score_id.lower())
    if score is None:
        raise NotFoundError("Score")
    ensure_owner(score.user_id, user_id)
    return score


async def update_score(
    user_id: str, score_id: str, score_update: ScoreUpdate, db: AsyncSession
) -> Score:
    db_score = await get_score(user_id, score_id, db)

    if score_update.performance is not None:
        performance = {
            key: value
            for key, value in score_update.performance.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if performance.get("rxd", db_score.rxd) and performance.get("scaled", db_score.scaled):
            raise ValidationError("A score cannot be both RX'd and scaled")
        for key, value in performance.items():
            setattr(db_score, key, value)

    if score_update.details is not None:
        details = score_update.details.model_dump(exclude_unset=True)
        if details.get("date") is not None:
            db_score.date = as_utc(details["date"])
        if details.get("notes") is not None:
            db_score.notes = details["notes"]
        if "feeling_rating" in details:
            db_score.feeling_rating = details["feeling_rating"]

    await _commit_with_stats(user_id, db)
    await db.refresh(db_score)
    return db_score


async def delete_score(user_id: str, score_id: str, db: AsyncSession) -> None:
    db_score = await get_score(user_id, score_id, db)

    await db.delete(db_score)
    await _commit_with_stats(user_id, db)
    logger.info(
        "Score deleted: %s by %s", score_id, user_id,
        extra={"user_id": user_id, "score_id": score_id},
    )
