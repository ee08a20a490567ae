from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user
from ...models.user import User
from ...crud.notification_crud import notification_crud
from ...core.exceptions import NotFoundError
from ...schemas.common import MessageResponse
from ...schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from ...utils.data_utils import total_pages

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[str] = Query(None),
    unread: bool = Query(False),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    notifications, total = await notification_crud.list_for_recipient(
        db, current_user.id, type=type, unread_only=unread, page=page, limit=limit
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        total=total,
        unread_count=await notification_crud.unread_count(db, current_user.id),
        total_pages=total_pages(total, limit),
        current_page=page,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return UnreadCountResponse(count=await notification_crud.unread_count(db, current_user.id))


@router.put("/mark-all-read", response_model=MessageResponse)
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    updated = await notification_crud.mark_all_read(db, current_user.id)
    await db.commit()
    logger.info(f"Marked {updated} notifications read: user_id={current_user.id}")
    return MessageResponse(message="All notifications marked as read")


@router.delete("/read/all", response_model=MessageResponse)
async def delete_read_notifications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    deleted = await notification_crud.delete_read(db, current_user.id)
    await db.commit()
    logger.info(f"Deleted {deleted} read notifications: user_id={current_user.id}")
    return MessageResponse(message="All read notifications deleted")


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    notification = await notification_crud.get_for_recipient(db, notification_id, current_user.id)
    if notification is None:
        raise NotFoundError("Notification not found")

    await notification_crud.mark_read(db, notification)
    await db.commit()
    return NotificationResponse.model_validate(await notification_crud.get_fresh(db, notification_id))


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    notification = await notification_crud.get_for_recipient(db, notification_id, current_user.id)
    if notification is None:
        raise NotFoundError("Notification not found")

    await db.delete(notification)
    await db.commit()
    return MessageResponse(message="Notification deleted successfully")
