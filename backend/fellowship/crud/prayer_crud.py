from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc

from .base import BaseCRUD
from ..models.prayer import PrayerEntry
from ..schemas.prayer import PrayerCreate, PrayerUpdate


class PrayerCRUD(BaseCRUD[PrayerEntry, PrayerCreate, PrayerUpdate]):

    async def create_entry(
        self, db: AsyncSession, data: PrayerCreate, user_id: str
    ) -> PrayerEntry:
        db_entry = PrayerEntry(user_id=user_id, **data.model_dump())
        db.add(db_entry)
        # Transaction management moved to upper layer
        return db_entry

    async def get_owned(
        self, db: AsyncSession, entry_id: str, user_id: str
    ) -> Optional[PrayerEntry]:
        """Entry by id, only if user_id owns it"""
        result = await db.execute(
            select(PrayerEntry).where(
                PrayerEntry.id == entry_id,
                PrayerEntry.user_id == user_id,
            )
        )
        return result.scalars().first()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        type: Optional[str] = None,
        limit: int = 20,
    ) -> List[PrayerEntry]:
        """Owned entries newest first; the date range applies only when both bounds are given"""
        query = select(PrayerEntry).where(PrayerEntry.user_id == user_id)
        if start is not None and end is not None:
            query = query.where(PrayerEntry.created_at >= start, PrayerEntry.created_at <= end)
        if type and type != "all":
            query = query.where(PrayerEntry.type == type)
        result = await db.execute(
            query.order_by(desc(PrayerEntry.created_at)).limit(limit)
        )
        return result.scalars().all()

    async def count_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        *,
        answered: Optional[bool] = None,
        since: Optional[datetime] = None,
    ) -> int:
        criteria = [PrayerEntry.user_id == user_id]
        if answered is not None:
            criteria.append(PrayerEntry.is_answered.is_(answered))
        if since is not None:
            criteria.append(PrayerEntry.created_at >= since)
        return await self.count(db, *criteria)

    async def total_duration(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(
            select(func.coalesce(func.sum(PrayerEntry.duration), 0))
            .where(PrayerEntry.user_id == user_id)
        )
        return int(result.scalar() or 0)

    async def recent_timestamps(
        self, db: AsyncSession, user_id: str, limit: int
    ) -> List[datetime]:
        """created_at of the newest `limit` entries"""
        result = await db.execute(
            select(PrayerEntry.created_at)
            .where(PrayerEntry.user_id == user_id)
            .order_by(desc(PrayerEntry.created_at))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def delete_owned(self, db: AsyncSession, entry: PrayerEntry) -> None:
        await db.delete(entry)


prayer_crud = PrayerCRUD(PrayerEntry)
