from sqlalchemy import Column, String, Boolean, Text, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin, utcnow
from ..core.constants import DEFAULT_EVENT_TYPE


class Event(Base, UUIDMixin, TimestampMixin):
    """Fellowship gathering members can RSVP to"""
    __tablename__ = "events"

    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    time = Column(String(50), nullable=False, comment="Display time, e.g. 7:00 PM")
    location = Column(String(200), nullable=False)
    max_attendees = Column(Integer, nullable=True, comment="NULL for unlimited")
    event_type = Column(String(20), nullable=False, default=DEFAULT_EVENT_TYPE)
    image_url = Column(Text, nullable=False, default="")

    is_active = Column(Boolean, default=True, nullable=False, comment="Soft delete flag")

    organizer = relationship("User", lazy="selectin")
    attendees = relationship(
        "EventAttendee",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventAttendee.rsvp_date",
        lazy="selectin",
    )


class EventAttendee(Base, UUIDMixin):
    """RSVP row; one per member per event"""
    __tablename__ = "event_attendees"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_user"),
    )

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rsvp_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="attendees")
    user = relationship("User", lazy="selectin")
