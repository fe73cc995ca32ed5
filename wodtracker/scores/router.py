# wodtracker/scores/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.dependencies import ensure_owner, get_current_user
from wodtracker.auth.models import User
from wodtracker.database import get_async_session
from wodtracker.ids import id_path
from wodtracker.pagination import pagination_params

from . import service
from .schemas import ScoreCreate, ScoreListResponse, ScoreResponse, ScoreUpdate

router = APIRouter()


@router.post("", response_model=ScoreResponse, status_code=status.HTTP_201_CREATED)
async def record_score(
    score: ScoreCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    db_score = await service.create_score(current_user, score, db)
    return ScoreResponse.from_score(db_score)


@router.get("", response_model=ScoreListResponse)
async def list_my_scores(
    paging: dict = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    scores, pagination = await service.list_scores(
        current_user.id, db, paging["page"], paging["limit"]
    )
    return ScoreListResponse(
        scores=[ScoreResponse.from_score(s) for s in scores], pagination=pagination
    )


@router.get("/user/{user_id}", response_model=ScoreListResponse)
async def list_scores_for_user(
    user_id: str = id_path("User id"),
    month: str | None = Query(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    limit: int = Query(50, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id)
    scores = await service.list_user_scores(current_user.id, db, month, limit)
    return ScoreListResponse(scores=[ScoreResponse.from_score(s) for s in scores])


@router.get("/{score_id}", response_model=ScoreResponse)
async def get_score(
    score_id: str = id_path("Score id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    db_score = await service.get_score(current_user.id, score_id, db)
    return ScoreResponse.from_score(db_score)


@router.put("/{score_id}", response_model=ScoreResponse)
async def update_score(
    score_update: ScoreUpdate,
    score_id: str = id_path("Score id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    db_score = await service.update_score(current_user.id, score_id, score_update, db)
    return ScoreResponse.from_score(db_score)


@router.delete("/{score_id}")
async def delete_score(
    score_id: str = id_path("Score id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    await service.delete_score(current_user.id, score_id, db)
    return {"message": "Score deleted successfully"}
