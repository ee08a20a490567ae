from sqlalchemy import Column, String, Boolean, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin


class Notification(Base, UUIDMixin, TimestampMixin):
    """In-app notification addressed to one member"""
    __tablename__ = "notifications"

    recipient_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    type = Column(String(32), nullable=False, index=True)
    message = Column(Text, nullable=False)

    related_post_id = Column(String(36), ForeignKey("posts.id", ondelete="SET NULL"), nullable=True)
    related_event_id = Column(String(36), ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    related_comment_id = Column(String(36), nullable=True)

    is_read = Column(Boolean, default=False, nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)

    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")
