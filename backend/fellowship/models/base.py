from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declared_attr

from ..database.session import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    """
    Creation and modification timestamps.
    created_at is the time axis for statistics and is never updated.
    """
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
        comment="Creation time"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="Last modification time"
    )


class UUIDMixin:
    """
    String UUID primary key.
    Ids are opaque to every caller; equality is the only operation on them.
    """
    @declared_attr
    def id(cls):
        return Column(
            String(36),
            primary_key=True,
            default=new_id,
            nullable=False,
            comment=f"{cls.__name__} id"
        )
