from .base import Base, TimestampMixin, UUIDMixin
from .user import User
from .invite_code import InviteCode
from .prayer import PrayerEntry
from .post import Post, PostReaction, PostComment
from .event import Event, EventAttendee
from .notification import Notification
from .mentorship import MentorshipRequest, MentorshipMessage
from .spiritual_log import SpiritualLog

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "InviteCode",
    "PrayerEntry",
    "Post",
    "PostReaction",
    "PostComment",
    "Event",
    "EventAttendee",
    "Notification",
    "MentorshipRequest",
    "MentorshipMessage",
    "SpiritualLog",
]
