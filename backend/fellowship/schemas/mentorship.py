from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel, UserSummary

MentorshipTopicLiteral = Literal[
    "Spiritual Growth",
    "Academic Guidance",
    "Career",
    "Relationships",
    "Mental Health",
    "Other",
]


class MentorshipCreate(CamelModel):
    topic: MentorshipTopicLiteral
    details: str = Field("", max_length=3000)
    preferred_times: List[str] = Field(default_factory=list)
    is_anonymous: bool = False


class MentorshipSchedule(CamelModel):
    scheduled_at: Optional[datetime] = None


class MentorshipMessageCreate(CamelModel):
    content: str = Field("", max_length=3000)


class MentorshipMessageResponse(CamelModel):
    id: str
    sender_id: str
    content: str
    created_at: datetime


class MentorshipResponse(CamelModel):
    id: str
    requester: Optional[UserSummary] = None
    assigned_leader: Optional[UserSummary] = None
    is_anonymous: bool
    topic: str
    details: str = ""
    preferred_times: List[str] = Field(default_factory=list)
    status: str
    scheduled_at: Optional[datetime] = None
    private_chat: List[MentorshipMessageResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MentorshipEnvelope(CamelModel):
    message: Optional[str] = None
    request: MentorshipResponse


class MentorshipListResponse(CamelModel):
    requests: List[MentorshipResponse]


class MentorshipChatResponse(CamelModel):
    message: str
    chat: List[MentorshipMessageResponse]
