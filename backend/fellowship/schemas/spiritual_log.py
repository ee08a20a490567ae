from typing import List, Optional
from datetime import date as date_type, datetime
from pydantic import Field

from .common import CamelModel


class Activities(CamelModel):
    prayer_minutes: int = 0
    bible_reading_minutes: int = 0
    devotion_minutes: int = 0
    notes: str = Field("", max_length=1000)


class DayLogUpsert(CamelModel):
    date: Optional[datetime] = None
    activities: Optional[Activities] = None


class SpiritualLogResponse(CamelModel):
    id: str
    date: date_type
    activities: Activities


class SpiritualLogEnvelope(CamelModel):
    log: SpiritualLogResponse


class SpiritualLogMonth(CamelModel):
    logs: List[SpiritualLogResponse]
