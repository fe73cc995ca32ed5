# wodtracker/users/service.py
import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.models import User
from wodtracker.auth.service import is_username_taken
from wodtracker.exceptions import ConflictError, NotFoundError, ValidationError
from wodtracker.users.schemas import (
    BenchmarkScore,
    BenchmarkScoreUpdate,
    LiftRecord,
    LiftRecordUpdate,
    PersonalInfo,
    PersonalInfoUpdate,
    Preferences,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)


async def get_user(user_id: str, db: AsyncSession) -> User:
    user = await db.get(User, user_id.lower())
    if user is None:
        raise NotFoundError("User")
    return user


async def update_profile(
    current_user: User, profile_data: ProfileUpdate, db: AsyncSession
) -> User:
    try:
        if profile_data.username and profile_data.username != current_user.username:
            if await is_username_taken(
                profile_data.username, db, exclude_user_id=current_user.id
            ):
                raise ConflictError("Username already taken")
            current_user.username = profile_data.username

        if profile_data.display_name is not None:
            current_user.display_name = profile_data.display_name

        if profile_data.bio is not None:
            current_user.bio = profile_data.bio

        if profile_data.preferences is not None:
            merged = {
                **(current_user.preferences or {}),
                **profile_data.preferences.model_dump(exclude_none=True),
            }
            current_user.preferences = Preferences.model_validate(merged).model_dump(
                mode="json"
            )

        await db.commit()
        await db.refresh(current_user)
        return current_user

    except ConflictError:
        await db.rollback()
        raise

    except IntegrityError:
        await db.rollback()
        raise ConflictError("Username already taken") from None


async def update_personal_info(
    current_user: User, info: PersonalInfoUpdate, db: AsyncSession
) -> User:
    # Copy so the JSON column registers as changed
    merged = {
        **(current_user.personal_info or {}),
        **info.model_dump(mode="json", exclude_none=True),
    }
    current_user.personal_info = PersonalInfo.model_validate(merged).model_dump(mode="json")

    await db.commit()
    await db.refresh(current_user)
    return current_user


async def save_benchmark_score(
    current_user: User, benchmark: BenchmarkScoreUpdate, db: AsyncSession
) -> User:
    score = benchmark.score
    record = BenchmarkScore(
        time=score.time,
        rounds=score.rounds,
        reps=score.reps,
        weight=score.weight,
        date=score.date or datetime.now(UTC),
        rxd=score.rxd,
    )
    current_user.benchmark_scores = {
        **(current_user.benchmark_scores or {}),
        benchmark.wod_name: record.model_dump(mode="json"),
    }

    await db.commit()
    await db.refresh(current_user)
    logger.info("Benchmark %s saved for user %s", benchmark.wod_name, current_user.id)
    return current_user


async def save_lift_record(
    current_user: User, lift: LiftRecordUpdate, db: AsyncSession
) -> User:
    record = LiftRecord(
        weight=lift.weight,
        reps=lift.reps,
        distance=lift.distance,
        date=lift.date or datetime.now(UTC),
    )
    current_user.personal_records = {
        **(current_user.personal_records or {}),
        lift.name: record.model_dump(mode="json"),
    }

    await db.commit()
    await db.refresh(current_user)
    return current_user


async def follow_user(current_user: User, target_id: str, db: AsyncSession) -> User:
    target = await get_user(target_id, db)
    if target.id == current_user.id:
        raise ValidationError("You cannot follow yourself")

    if target.id not in (current_user.following or []):
        current_user.following = [*(current_user.following or []), target.id]
    if current_user.id not in (target.followers or []):
        target.followers = [*(target.followers or []), current_user.id]

    await db.commit()
    await db.refresh(current_user)
    await db.refresh(target)
    return target


async def unfollow_user(current_user: User, target_id: str, db: AsyncSession) -> User:
    target = await get_user(target_id, db)

    current_user.following = [
        user_id for user_id in (current_user.following or []) if user_id != target.id
    ]
    target.followers = [
        user_id for user_id in (target.followers or []) if user_id != current_user.id
    ]

    await db.commit()
    await db.refresh(current_user)
    await db.refresh(target)
    return target
