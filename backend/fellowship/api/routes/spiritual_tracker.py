from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user
from ...models.spiritual_log import SpiritualLog
from ...models.user import User
from ...crud.spiritual_log_crud import spiritual_log_crud
from ...core.exceptions import ValidationError
from ...schemas.spiritual_log import (
    Activities,
    DayLogUpsert,
    SpiritualLogEnvelope,
    SpiritualLogMonth,
    SpiritualLogResponse,
)
from ...utils.data_utils import as_utc, month_bounds

router = APIRouter(prefix="/spiritual-tracker", tags=["spiritual-tracker"])
logger = logging.getLogger(__name__)


def _serialize(log: SpiritualLog) -> SpiritualLogResponse:
    return SpiritualLogResponse(
        id=log.id,
        date=log.date,
        activities=Activities(
            prayer_minutes=log.prayer_minutes,
            bible_reading_minutes=log.bible_reading_minutes,
            devotion_minutes=log.devotion_minutes,
            notes=log.notes or "",
        ),
    )


@router.get("/month", response_model=SpiritualLogMonth)
async def get_month(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, description="1-12"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The member's own logs for one month, in date order"""
    if not year or month is None or not 1 <= month <= 12:
        raise ValidationError("year and month are required")

    first, last = month_bounds(year, month)
    logs = await spiritual_log_crud.list_between(db, current_user.id, first, last)
    return SpiritualLogMonth(logs=[_serialize(log) for log in logs])


@router.post("/day", response_model=SpiritualLogEnvelope)
async def upsert_day(
    data: DayLogUpsert,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Replace one day's activities; the timestamp is reduced to its UTC calendar day"""
    if data.date is None:
        raise ValidationError("date is required")

    day = as_utc(data.date).date()
    activities = data.activities or Activities()
    user_id = current_user.id
    values = {
        "prayer_minutes": max(0, activities.prayer_minutes),
        "bible_reading_minutes": max(0, activities.bible_reading_minutes),
        "devotion_minutes": max(0, activities.devotion_minutes),
        "notes": activities.notes or "",
    }

    try:
        log = await spiritual_log_crud.upsert_day(db, user_id, day, values)
        await db.commit()
    except IntegrityError:
        # a concurrent save created the day first; overwrite it
        await db.rollback()
        logger.info(f"Spiritual log for {day} created concurrently, updating: user_id={user_id}")
        log = await spiritual_log_crud.upsert_day(db, user_id, day, values)
        await db.commit()

    logger.info(f"Spiritual log saved: user_id={user_id}, date={day}")
    return SpiritualLogEnvelope(log=_serialize(log))
