from typing import List, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel, UserSummary


class NotificationCreate(CamelModel):
    recipient_id: str
    sender_id: str
    type: str
    message: str
    related_post_id: Optional[str] = None
    related_event_id: Optional[str] = None
    related_comment_id: Optional[str] = None


class NotificationResponse(CamelModel):
    id: str
    recipient_id: str
    sender: Optional[UserSummary] = None
    type: str
    message: str
    related_post_id: Optional[str] = None
    related_event_id: Optional[str] = None
    related_comment_id: Optional[str] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(CamelModel):
    notifications: List[NotificationResponse] = Field(default_factory=list)
    total: int
    unread_count: int
    total_pages: int
    current_page: int


class UnreadCountResponse(CamelModel):
    count: int
