from sqlalchemy import Column, String, Boolean, Text
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin
from ..core.constants import DEFAULT_ROLE, DEFAULT_FELLOWSHIP_ROLE


class User(Base, UUIDMixin, TimestampMixin):
    """Fellowship member account"""
    __tablename__ = "users"

    # Identity
    name = Column(String(100), nullable=False, comment="Display name")
    email = Column(String(255), unique=True, nullable=False, index=True, comment="Login email")
    password_hash = Column(String(255), nullable=False, comment="bcrypt hash")

    # Privilege and grouping, fixed at registration from the invite code
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, index=True, comment="Privilege role")
    ministry = Column(String(100), nullable=False, default="", comment="Ministry name")
    family_id = Column(String(36), nullable=True, comment="Fellowship family grouping")

    # Profile
    fellowship_role = Column(String(100), nullable=False, default=DEFAULT_FELLOWSHIP_ROLE, comment="Descriptive label, e.g. Student")
    bio = Column(Text, nullable=False, default="", comment="Short biography")
    profile_photo = Column(Text, nullable=False, default="", comment="Profile photo URL")

    # Status
    is_active = Column(Boolean, default=True, nullable=False, comment="Soft deactivation flag")

    # Relationships
    prayer_entries = relationship("PrayerEntry", back_populates="user", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="author")
