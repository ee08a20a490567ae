from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field, field_validator

from .common import CamelModel

PrayerTypeLiteral = Literal["personal", "intercession", "thanksgiving", "request"]


def _validate_tags(tags):
    if tags is None:
        return tags
    cleaned = [tag.strip() for tag in tags if tag and tag.strip()]
    for tag in cleaned:
        if len(tag) > 50:
            raise ValueError("Tags can be at most 50 characters")
    return cleaned


class PrayerCreate(CamelModel):
    type: PrayerTypeLiteral
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    duration: int = Field(..., ge=1, description="Minutes spent praying")
    tags: List[str] = Field(default_factory=list)
    is_private: bool = True

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return _validate_tags(v)


class PrayerUpdate(CamelModel):
    """Partial update; is_answered may only move from False to True."""
    type: Optional[PrayerTypeLiteral] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    duration: Optional[int] = Field(None, ge=1)
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None
    is_answered: Optional[bool] = None
    answered_description: Optional[str] = Field(None, max_length=500)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return _validate_tags(v)


class PrayerAnswer(CamelModel):
    answered_description: str = Field(..., min_length=1, max_length=500)


class PrayerResponse(CamelModel):
    id: str
    user_id: str
    type: str
    title: str
    description: str
    duration: int
    is_answered: bool
    answered_date: Optional[datetime] = None
    answered_description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_private: bool
    created_at: datetime
    updated_at: datetime


class PrayerStats(CamelModel):
    total_prayers: int
    total_duration: int
    answered_prayers: int
    weekly_goal: int
    current_streak: int
    longest_streak: int
    this_week_prayers: int
