from .common import CamelModel, UserSummary, MessageResponse
from .user import RegisterRequest, LoginRequest, UserPublic, UserDetail, AuthResponse
from .invite_code import InviteCodeCreate, InviteCodeResponse, InviteValidationResponse
from .prayer import PrayerCreate, PrayerUpdate, PrayerAnswer, PrayerResponse, PrayerStats
from .post import PostCreate, PostResponse, PostListResponse, CommentCreate
from .event import EventCreate, EventResponse
from .notification import NotificationCreate, NotificationResponse, NotificationListResponse
from .mentorship import MentorshipCreate, MentorshipResponse
from .spiritual_log import DayLogUpsert, SpiritualLogResponse

__all__ = [
    "CamelModel",
    "UserSummary",
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "UserDetail",
    "AuthResponse",
    "InviteCodeCreate",
    "InviteCodeResponse",
    "InviteValidationResponse",
    "PrayerCreate",
    "PrayerUpdate",
    "PrayerAnswer",
    "PrayerResponse",
    "PrayerStats",
    "PostCreate",
    "PostResponse",
    "PostListResponse",
    "CommentCreate",
    "EventCreate",
    "EventResponse",
    "NotificationCreate",
    "NotificationResponse",
    "NotificationListResponse",
    "MentorshipCreate",
    "MentorshipResponse",
    "DayLogUpsert",
    "SpiritualLogResponse",
]
