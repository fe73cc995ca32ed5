# wodtracker/analytics/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.dependencies import ensure_owner, get_current_user
from wodtracker.auth.models import User
from wodtracker.database import get_async_session
from wodtracker.ids import id_path

from . import service
from .schemas import StatsReport

router = APIRouter()


@router.get("/stats/{user_id}", response_model=StatsReport)
async def get_user_stats(
    user_id: str = id_path("User id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id, "You can only view your own statistics")
    return await service.get_user_stats(current_user.id, db)
