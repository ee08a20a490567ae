from sqlalchemy import Column, String, Boolean, Text, Integer, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin


class PrayerEntry(Base, UUIDMixin, TimestampMixin):
    """Personal prayer journal entry, visible to and editable by its owner only"""
    __tablename__ = "prayer_entries"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(20), nullable=False, comment="personal | intercession | thanksgiving | request")
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False)
    duration = Column(Integer, nullable=False, comment="Minutes, at least 1")

    # Unanswered -> Answered only
    is_answered = Column(Boolean, default=False, nullable=False)
    answered_date = Column(DateTime(timezone=True), nullable=True)
    answered_description = Column(String(500), nullable=True)

    tags = Column(JSON, nullable=False, default=list, comment="List of short tags")
    is_private = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="prayer_entries")
