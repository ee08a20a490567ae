from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin
from ..core.constants import LEADER_ROLES


class MentorshipRequest(Base, UUIDMixin, TimestampMixin):
    """Member request for mentorship or counseling"""
    __tablename__ = "mentorship_requests"

    requester_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    assigned_leader_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    is_anonymous = Column(Boolean, default=False, nullable=False)
    topic = Column(String(50), nullable=False)
    details = Column(String(3000), nullable=False, default="")
    preferred_times = Column(JSON, nullable=False, default=list)

    status = Column(String(20), nullable=False, default="pending", index=True,
                    comment="pending | accepted | declined | scheduled | completed")
    scheduled_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    requester = relationship("User", foreign_keys=[requester_id], lazy="selectin")
    assigned_leader = relationship("User", foreign_keys=[assigned_leader_id], lazy="selectin")
    messages = relationship(
        "MentorshipMessage",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="MentorshipMessage.created_at",
        lazy="selectin",
    )

    def is_party(self, user) -> bool:
        """Requester, assigned leader, or any leader-tier member."""
        return (
            self.requester_id == user.id
            or (self.assigned_leader_id is not None and self.assigned_leader_id == user.id)
            or user.role in LEADER_ROLES
        )


class MentorshipMessage(Base, UUIDMixin, TimestampMixin):
    """Private thread message between requester and leader"""
    __tablename__ = "mentorship_messages"

    request_id = Column(String(36), ForeignKey("mentorship_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(String(3000), nullable=False)

    request = relationship("MentorshipRequest", back_populates="messages")
