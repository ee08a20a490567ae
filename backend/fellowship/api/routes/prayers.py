from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user
from ...models.base import utcnow
from ...models.user import User
from ...crud.prayer_crud import prayer_crud
from ...core.exceptions import NotFoundError, ValidationError
from ...schemas.common import MessageResponse
from ...schemas.prayer import PrayerAnswer, PrayerCreate, PrayerResponse, PrayerStats, PrayerUpdate
from ...services.prayer_stats import prayer_stats_service
from ...utils.data_utils import as_utc

router = APIRouter(prefix="/prayers", tags=["prayers"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[PrayerResponse])
async def list_prayers(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    type: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Own entries newest first; start and end filter only when both are given"""
    entries = await prayer_crud.list_for_user(
        db,
        current_user.id,
        start=as_utc(start) if start else None,
        end=as_utc(end) if end else None,
        type=type,
        limit=limit,
    )
    return [PrayerResponse.model_validate(entry) for entry in entries]


@router.get("/stats", response_model=PrayerStats)
async def get_prayer_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await prayer_stats_service.compute_stats(db, current_user.id)


@router.post("", response_model=PrayerResponse, status_code=status.HTTP_201_CREATED)
async def create_prayer(
    data: PrayerCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    entry = await prayer_crud.create_entry(db, data, current_user.id)
    await db.commit()
    logger.info(f"Prayer entry created: user_id={current_user.id}, entry_id={entry.id}")
    return PrayerResponse.model_validate(await prayer_crud.get_fresh(db, entry.id))


async def _get_owned_or_404(db: AsyncSession, entry_id: str, user: User):
    entry = await prayer_crud.get_owned(db, entry_id, user.id)
    if entry is None:
        raise NotFoundError("Prayer entry not found")
    return entry


def _mark_answered(entry, description: str) -> None:
    entry.is_answered = True
    entry.answered_date = utcnow()
    entry.answered_description = description


@router.put("/{entry_id}", response_model=PrayerResponse)
async def update_prayer(
    entry_id: str,
    data: PrayerUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Owner-only partial update; answering requires a description and cannot be undone"""
    entry = await _get_owned_or_404(db, entry_id, current_user)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    is_answered = changes.pop("is_answered", None)
    answered_description = changes.pop("answered_description", None)
    if is_answered is False and entry.is_answered:
        raise ValidationError("An answered prayer cannot be marked unanswered")
    if is_answered and not entry.is_answered:
        if not answered_description:
            raise ValidationError("answeredDescription is required to mark a prayer answered")
        _mark_answered(entry, answered_description)
    elif answered_description is not None and entry.is_answered:
        entry.answered_description = answered_description

    await prayer_crud.update(db, db_obj=entry, obj_in=changes)
    await db.commit()
    return PrayerResponse.model_validate(await prayer_crud.get_fresh(db, entry_id))


@router.post("/{entry_id}/answer", response_model=PrayerResponse)
async def answer_prayer(
    entry_id: str,
    data: PrayerAnswer,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Unanswered -> Answered"""
    entry = await _get_owned_or_404(db, entry_id, current_user)
    if entry.is_answered:
        raise ValidationError("Prayer entry is already answered")

    _mark_answered(entry, data.answered_description)
    await db.commit()
    logger.info(f"Prayer entry answered: entry_id={entry_id}")
    return PrayerResponse.model_validate(await prayer_crud.get_fresh(db, entry_id))


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_prayer(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    entry = await _get_owned_or_404(db, entry_id, current_user)
    await prayer_crud.delete_owned(db, entry)
    await db.commit()
    return MessageResponse(message="Prayer entry deleted successfully")
