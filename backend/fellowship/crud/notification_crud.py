from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, desc

from .base import BaseCRUD
from ..models.base import utcnow
from ..models.notification import Notification
from ..schemas.notification import NotificationCreate


class NotificationCRUD(BaseCRUD[Notification, NotificationCreate, dict]):

    async def list_for_recipient(
        self,
        db: AsyncSession,
        recipient_id: str,
        *,
        type: Optional[str] = None,
        unread_only: bool = False,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        """Page of a member's notifications newest first, plus the filtered total"""
        criteria = [Notification.recipient_id == recipient_id]
        if type:
            criteria.append(Notification.type == type)
        if unread_only:
            criteria.append(Notification.is_read.is_(False))

        result = await db.execute(
            select(Notification)
            .where(*criteria)
            .order_by(desc(Notification.created_at))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total = await self.count(db, *criteria)
        return result.scalars().all(), total

    async def unread_count(self, db: AsyncSession, recipient_id: str) -> int:
        return await self.count(
            db,
            Notification.recipient_id == recipient_id,
            Notification.is_read.is_(False),
        )

    async def get_for_recipient(
        self, db: AsyncSession, notification_id: str, recipient_id: str
    ) -> Optional[Notification]:
        result = await db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.recipient_id == recipient_id,
            )
        )
        return result.scalars().first()

    async def mark_read(self, db: AsyncSession, notification: Notification) -> Notification:
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = utcnow()
        return notification

    async def mark_all_read(self, db: AsyncSession, recipient_id: str) -> int:
        result = await db.execute(
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True, read_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_read(self, db: AsyncSession, recipient_id: str) -> int:
        result = await db.execute(
            delete(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_read.is_(True),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount


notification_crud = NotificationCRUD(Notification)
