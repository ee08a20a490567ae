from typing import List, Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base import BaseCRUD
from ..models.spiritual_log import SpiritualLog


class SpiritualLogCRUD(BaseCRUD[SpiritualLog, dict, dict]):

    async def get_for_day(
        self, db: AsyncSession, user_id: str, day: date
    ) -> Optional[SpiritualLog]:
        result = await db.execute(
            select(SpiritualLog).where(
                SpiritualLog.user_id == user_id,
                SpiritualLog.date == day,
            )
        )
        return result.scalars().first()

    async def list_between(
        self, db: AsyncSession, user_id: str, first: date, last: date
    ) -> List[SpiritualLog]:
        result = await db.execute(
            select(SpiritualLog)
            .where(
                SpiritualLog.user_id == user_id,
                SpiritualLog.date >= first,
                SpiritualLog.date <= last,
            )
            .order_by(SpiritualLog.date)
        )
        return result.scalars().all()

    async def upsert_day(
        self, db: AsyncSession, user_id: str, day: date, activities: dict
    ) -> SpiritualLog:
        """Replace the day's activities, creating the row if missing"""
        log = await self.get_for_day(db, user_id, day)
        if log is None:
            log = SpiritualLog(user_id=user_id, date=day)
            db.add(log)
        for field, value in activities.items():
            setattr(log, field, value)
        # Transaction management moved to upper layer
        return log


spiritual_log_crud = SpiritualLogCRUD(SpiritualLog)
