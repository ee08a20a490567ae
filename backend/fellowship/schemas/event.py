from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel, UserSummary

EventTypeLiteral = Literal["bible-study", "worship", "outreach", "fellowship", "prayer", "other"]


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    date: datetime
    time: str = Field(..., min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=200)
    event_type: EventTypeLiteral = "fellowship"
    max_attendees: Optional[int] = Field(None, ge=1)
    image_url: str = Field("", max_length=2000)


class AttendeeResponse(CamelModel):
    user: UserSummary
    rsvp_date: datetime


class EventResponse(CamelModel):
    id: str
    title: str
    description: str
    date: datetime
    time: str
    location: str
    event_type: str
    max_attendees: Optional[int] = None
    image_url: str = ""
    organizer: Optional[UserSummary] = None
    attendees: List[AttendeeResponse] = Field(default_factory=list)
    created_at: datetime


class EventCreateResponse(CamelModel):
    message: str
    event: EventResponse


class RsvpResponse(CamelModel):
    message: str
    attendees_count: int
