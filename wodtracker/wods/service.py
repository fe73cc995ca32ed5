# wodtracker/wods/service.py
import logging
from typing import Sequence

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.auth.dependencies import ensure_owner
from wodtracker.auth.models import User
from wodtracker.exceptions import NotFoundError, ValidationError
from wodtracker.pagination import Pagination

from .models import Wod
from .schemas import Classification, Structure, WodCreate, WodUpdate

logger = logging.getLogger(__name__)


async def create_wod(user_id: str, wod: WodCreate, db: AsyncSession) -> Wod:
    db_wod = Wod(
        name=wod.name,
        description=wod.description,
        classification=wod.classification.model_dump(mode="json"),
        structure=wod.structure.model_dump(mode="json"),
        is_public=wod.is_public,
        created_by=user_id,
    )
    db.add(db_wod)
    await db.commit()
    await db.refresh(db_wod)

    logger.info("WOD created: %s by %s", db_wod.id, user_id)
    return db_wod


async def get_wod(wod_id: str, db: AsyncSession) -> Wod:
    wod = await db.get(Wod, wod_id.lower())
    if wod is None:
        raise NotFoundError("WOD")
    return wod


async def get_visible_wod(wod_id: str, viewer: User | None, db: AsyncSession) -> Wod:
    """Private WODs are only readable by their owner."""
    wod = await get_wod(wod_id, db)
    if not wod.is_public:
        ensure_owner(wod.created_by, viewer.id if viewer else "", "This WOD is private")
    return wod


async def list_wods(
    viewer: User | None,
    db: AsyncSession,
    page: int = 1,
    limit: int = 20,
    public_only: bool = False,
) -> tuple[Sequence[Wod], Pagination]:
    if public_only or viewer is None:
        condition = Wod.is_public.is_(True)
    else:
        condition = or_(Wod.is_public.is_(True), Wod.created_by == viewer.id)
    return await _paginate(condition, db, page, limit)


async def list_user_wods(
    user_id: str, db: AsyncSession, page: int = 1, limit: int = 20
) -> tuple[Sequence[Wod], Pagination]:
    return await _paginate(Wod.created_by == user_id, db, page, limit)


async def _paginate(condition, db: AsyncSession, page: int, limit: int):
    skip = (page - 1) * limit
    result = await db.execute(
        select(Wod)
        .where(condition)
        .order_by(desc(Wod.created_at), desc(Wod.id))
        .offset(skip)
        .limit(limit)
    )
    total = await db.scalar(select(func.count(Wod.id)).where(condition))
    return result.scalars().all(), Pagination.build(page, limit, total or 0)


async def update_wod(user_id: str, wod_id: str, wod_update: WodUpdate, db: AsyncSession) -> Wod:
    db_wod = await get_wod(wod_id, db)
    ensure_owner(db_wod.created_by, user_id, "You can only edit your own WODs")

    update_data = wod_update.model_dump(
        mode="json", exclude_unset=True, exclude={"classification", "structure"}
    )
    for key, value in update_data.items():
        if value is None and key != "description":
            continue
        setattr(db_wod, key, value)

    # Nested blocks are merged into the stored document and re-validated as a whole
    if wod_update.classification is not None:
        db_wod.classification = _merge_block(
            Classification, "classification", db_wod.classification, wod_update.classification
        )
    if wod_update.structure is not None:
        db_wod.structure = _merge_block(
            Structure, "structure", db_wod.structure, wod_update.structure
        )

    await db.commit()
    await db.refresh(db_wod)
    return db_wod


def _merge_block(model: type[BaseModel], name: str, stored: dict, changes: BaseModel) -> dict:
    merged = {**stored, **changes.model_dump(mode="json", exclude_unset=True)}
    try:
        return model.model_validate(merged).model_dump(mode="json")
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc, prefix=name) from None


async def delete_wod(user_id: str, wod_id: str, db: AsyncSession) -> None:
    db_wod = await get_wod(wod_id, db)
    ensure_owner(db_wod.created_by, user_id, "You can only delete your own WODs")

    await db.delete(db_wod)
    await db.commit()
    logger.info("WOD deleted: %s by %s", wod_id, user_id)
