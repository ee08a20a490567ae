from sqlalchemy import Column, String, Integer, Date, ForeignKey, UniqueConstraint

from .base import Base, TimestampMixin, UUIDMixin


class SpiritualLog(Base, UUIDMixin, TimestampMixin):
    """One member's devotional activity for one calendar day"""
    __tablename__ = "spiritual_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_user_date"),
    )

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    prayer_minutes = Column(Integer, nullable=False, default=0)
    bible_reading_minutes = Column(Integer, nullable=False, default=0)
    devotion_minutes = Column(Integer, nullable=False, default=0)
    notes = Column(String(1000), nullable=False, default="")
