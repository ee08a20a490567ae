from sqlalchemy import Column, String, Boolean, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin


class InviteCode(Base, UUIDMixin, TimestampMixin):
    """
    Single-use registration code granting a role, ministry and family.
    used_by moves from NULL to a user id exactly once; rows are deactivated, never deleted.
    """
    __tablename__ = "invite_codes"

    code = Column(String(64), unique=True, nullable=False, index=True, comment="Upper-cased code")
    role = Column(String(32), nullable=False, comment="Role granted on registration")
    ministry = Column(String(100), nullable=False, default="", comment="Ministry granted")
    family_id = Column(String(36), nullable=True, comment="Family granted")
    description = Column(Text, nullable=False, default="", comment="Admin note")

    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, comment="Issuing user")
    used_by_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True, comment="Consuming user")

    expires_at = Column(DateTime(timezone=True), nullable=True, comment="Expiry, NULL for never")
    is_active = Column(Boolean, default=True, nullable=False, index=True, comment="Soft deactivation flag")

    created_by = relationship("User", foreign_keys=[created_by_id], lazy="selectin")
    used_by = relationship("User", foreign_keys=[used_by_id], lazy="selectin")
