from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from .base import BaseCRUD
from ..models.event import Event, EventAttendee
from ..schemas.event import EventCreate


class EventCRUD(BaseCRUD[Event, EventCreate, dict]):

    async def create_event(
        self, db: AsyncSession, data: EventCreate, organizer_id: str
    ) -> Event:
        db_event = Event(organizer_id=organizer_id, **data.model_dump())
        db.add(db_event)
        # Transaction management moved to upper layer
        return db_event

    async def get_active(self, db: AsyncSession, event_id: str) -> Optional[Event]:
        result = await db.execute(
            select(Event).where(Event.id == event_id, Event.is_active.is_(True))
        )
        return result.scalars().first()

    async def list_active(self, db: AsyncSession) -> List[Event]:
        """Active events in date order"""
        result = await db.execute(
            select(Event).where(Event.is_active.is_(True)).order_by(Event.date)
        )
        return result.scalars().all()

    async def get_attendance(
        self, db: AsyncSession, event_id: str, user_id: str
    ) -> Optional[EventAttendee]:
        result = await db.execute(
            select(EventAttendee).where(
                EventAttendee.event_id == event_id,
                EventAttendee.user_id == user_id,
            )
        )
        return result.scalars().first()

    async def count_attendees(self, db: AsyncSession, event_id: str) -> int:
        result = await db.execute(
            select(func.count(EventAttendee.id)).where(EventAttendee.event_id == event_id)
        )
        return result.scalar() or 0

    async def add_attendee(
        self, db: AsyncSession, event_id: str, user_id: str
    ) -> EventAttendee:
        attendee = EventAttendee(event_id=event_id, user_id=user_id)
        db.add(attendee)
        await db.flush()
        return attendee

    async def remove_attendee(self, db: AsyncSession, event_id: str, user_id: str) -> None:
        await db.execute(
            delete(EventAttendee)
            .where(
                EventAttendee.event_id == event_id,
                EventAttendee.user_id == user_id,
            )
            .execution_options(synchronize_session=False)
        )

    async def soft_delete(self, db: AsyncSession, event: Event) -> Event:
        event.is_active = False
        return event


event_crud = EventCRUD(Event)
