# wodtracker/wods/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.dependencies import (
    ensure_owner,
    get_current_user,
    get_optional_current_user,
)
from wodtracker.auth.models import User
from wodtracker.database import get_async_session
from wodtracker.ids import id_path
from wodtracker.pagination import pagination_params

from . import service
from .schemas import WodCreate, WodListResponse, WodResponse, WodUpdate

router = APIRouter()


@router.post("", response_model=WodResponse, status_code=status.HTTP_201_CREATED)
async def create_new_wod(
    wod: WodCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await service.create_wod(current_user.id, wod, db)


@router.get("", response_model=WodListResponse)
async def list_wods(
    public: bool = Query(False, description="Only return public WODs"),
    paging: dict = Depends(pagination_params),
    current_user: User | None = Depends(get_optional_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    wods, pagination = await service.list_wods(
        current_user, db, paging["page"], paging["limit"], public_only=public
    )
    return WodListResponse(wods=wods, pagination=pagination)


@router.get("/my-wods", response_model=WodListResponse)
async def list_my_wods(
    paging: dict = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    wods, pagination = await service.list_user_wods(
        current_user.id, db, paging["page"], paging["limit"]
    )
    return WodListResponse(wods=wods, pagination=pagination)


@router.get("/user/{user_id}", response_model=WodListResponse)
async def list_wods_for_user(
    user_id: str = id_path("Owner id"),
    paging: dict = Depends(pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    ensure_owner(user_id, current_user.id)
    wods, pagination = await service.list_user_wods(
        current_user.id, db, paging["page"], paging["limit"]
    )
    return WodListResponse(wods=wods, pagination=pagination)


@router.get("/{wod_id}", response_model=WodResponse)
async def get_wod(
    wod_id: str = id_path("WOD id"),
    current_user: User | None = Depends(get_optional_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await service.get_visible_wod(wod_id, current_user, db)


@router.put("/{wod_id}", response_model=WodResponse)
async def update_wod(
    wod_update: WodUpdate,
    wod_id: str = id_path("WOD id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await service.update_wod(current_user.id, wod_id, wod_update, db)


@router.delete("/{wod_id}")
async def delete_wod(
    wod_id: str = id_path("WOD id"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    await service.delete_wod(current_user.id, wod_id, db)
    return {"message": "WOD deleted successfully"}
