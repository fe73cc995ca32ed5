# wodtracker/users/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.dependencies import ensure_owner, get_current_user
from wodtracker.auth.models import User
from wodtracker.database import get_async_session
from wodtracker.ids import id_path

from . import service
from .schemas import (
    BenchmarkScoresResponse,
    BenchmarkScoreUpdate,
    FollowResponse,
    LiftRecordUpdate,
    PersonalInfoResponse,
    PersonalInfoUpdate,
    ProfileUpdate,
    PublicUserResponse,
    UserResponse,
)

router = APIRouter()


@router.get("/{user_id}", response_model=UserResponse | PublicUserResponse)
async def get_user_profile(
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    if user_id.lower() == current_user.id:
        return UserResponse.from_user(current_user)

    user = await service.get_user(user_id, db)
    return PublicUserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user_profile(
    profile_data: ProfileUpdate,
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id, "You can only update your own profile")
    updated_user = await service.update_profile(current_user, profile_data, db)
    return UserResponse.from_user(updated_user)


@router.get("/{user_id}/personal-info", response_model=PersonalInfoResponse)
async def get_personal_info(
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
):
    ensure_owner(user_id, current_user.id, "You can only view your own personal info")
    return PersonalInfoResponse(personal_info=current_user.personal_info or {})


@router.put("/{user_id}/personal-info", response_model=PersonalInfoResponse)
async def update_personal_info(
    info: PersonalInfoUpdate,
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id, "You can only update your own personal info")
    user = await service.update_personal_info(current_user, info, db)
    return PersonalInfoResponse(personal_info=user.personal_info)


@router.get("/{user_id}/benchmark-scores", response_model=BenchmarkScoresResponse)
async def get_benchmark_scores(
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    user = current_user
    if user_id.lower() != current_user.id:
        user = await service.get_user(user_id, db)
    return BenchmarkScoresResponse(benchmark_scores=user.benchmark_scores or {})


@router.put("/{user_id}/benchmark-scores", response_model=BenchmarkScoresResponse)
async def update_benchmark_score(
    benchmark: BenchmarkScoreUpdate,
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id, "You can only update your own benchmark scores")
    user = await service.save_benchmark_score(current_user, benchmark, db)
    return BenchmarkScoresResponse(benchmark_scores=user.benchmark_scores)


@router.put("/{user_id}/lift-records", response_model=UserResponse)
async def update_lift_record(
    lift: LiftRecordUpdate,
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id, "You can only update your own records")
    user = await service.save_lift_record(current_user, lift, db)
    return UserResponse.from_user(user)


@router.post("/{user_id}/follow", response_model=FollowResponse)
async def follow(
    user_id: str = id_path("User to follow"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    target = await service.follow_user(current_user, user_id, db)
    return FollowResponse(
        following=current_user.following, followers_count=len(target.followers)
    )


@router.delete("/{user_id}/follow", response_model=FollowResponse)
async def unfollow(
    user_id: str = id_path("User to unfollow"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    target = await service.unfollow_user(current_user, user_id, db)
    return FollowResponse(
        following=current_user.following, followers_count=len(target.followers)
    )
