import logging
from typing import Iterable, List, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import NOTIFICATION_EVENT
from ..crud.notification_crud import notification_crud
from ..models.notification import Notification
from ..schemas.notification import NotificationCreate, NotificationResponse
from .realtime import Publisher, user_room

logger = logging.getLogger(__name__)


class NotificationService:
    """Persists in-app notifications and pushes them to the recipient's room"""

    async def create_notification(
        self,
        db: AsyncSession,
        data: NotificationCreate,
        publisher: Optional[Publisher] = None,
    ) -> Notification:
        """
        Store and commit the notification, then broadcast it.
        A broadcast failure is logged and never reaches the caller.
        """
        notification = await notification_crud.create(db, data)
        await db.commit()
        notification = await notification_crud.get_fresh(db, notification.id)

        if publisher is not None:
            await self.broadcast(notification, publisher)
        return notification

    async def notify(
        self,
        db: AsyncSession,
        data: NotificationCreate,
        publisher: Optional[Publisher] = None,
    ) -> Optional[Notification]:
        """Side-effect notification for an already committed mutation; failures are logged only."""
        try:
            return await self.create_notification(db, data, publisher)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                f"Notification not stored: recipient_id={data.recipient_id}, type={data.type}, error: {e}"
            )
            return None

    async def notify_many(
        self,
        db: AsyncSession,
        recipient_ids: Iterable[str],
        *,
        sender_id: str,
        type: str,
        message: str,
        publisher: Optional[Publisher] = None,
        **related,
    ) -> List[Notification]:
        created = []
        for recipient_id in recipient_ids:
            data = NotificationCreate(
                recipient_id=recipient_id,
                sender_id=sender_id,
                type=type,
                message=message,
                **related,
            )
            notification = await self.notify(db, data, publisher)
            if notification is not None:
                created.append(notification)
        return created

    async def broadcast(self, notification: Notification, publisher: Publisher) -> None:
        payload = jsonable_encoder(
            NotificationResponse.model_validate(notification).model_dump(by_alias=True)
        )
        try:
            await publisher.publish(
                user_room(notification.recipient_id), NOTIFICATION_EVENT, payload
            )
        except Exception as e:
            logger.error(
                f"Notification broadcast failed: notification_id={notification.id}, error: {e}"
            )


# Singleton instance
notification_service = NotificationService()
