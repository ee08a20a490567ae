from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user, get_publisher, require_leader
from ...models.user import User
from ...crud.event_crud import event_crud
from ...core.constants import ADMIN_ROLES
from ...core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ...schemas.common import MessageResponse
from ...schemas.event import EventCreate, EventCreateResponse, EventResponse, RsvpResponse
from ...schemas.notification import NotificationCreate
from ...services.notification_service import notification_service
from ...services.realtime import Publisher

router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger(__name__)


async def _get_event_or_404(db: AsyncSession, event_id: str):
    event = await event_crud.get_active(db, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


@router.get("", response_model=List[EventResponse])
async def list_events(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Active events by date"""
    events = await event_crud.list_active(db)
    return [EventResponse.model_validate(event) for event in events]


@router.post("", response_model=EventCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db)
):
    new_event = await event_crud.create_event(db, data, current_user.id)
    await db.commit()
    logger.info(f"Event created: event_id={new_event.id}, organizer={current_user.id}")
    event = await event_crud.get_fresh(db, new_event.id)
    return EventCreateResponse(
        message="Event created successfully",
        event=EventResponse.model_validate(event),
    )


@router.post("/{event_id}/rsvp", response_model=RsvpResponse)
async def rsvp_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    event = await _get_event_or_404(db, event_id)
    organizer_id, title = event.organizer_id, event.title
    user_id, user_name = current_user.id, current_user.name

    if await event_crud.get_attendance(db, event_id, user_id):
        raise ValidationError("Already RSVPed to this event")
    if event.max_attendees and await event_crud.count_attendees(db, event_id) >= event.max_attendees:
        raise ValidationError("Event is full")

    try:
        await event_crud.add_attendee(db, event_id, user_id)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValidationError("Already RSVPed to this event")

    response = RsvpResponse(
        message="RSVP successful",
        attendees_count=await event_crud.count_attendees(db, event_id),
    )
    if organizer_id != user_id:
        await notification_service.notify(
            db,
            NotificationCreate(
                recipient_id=organizer_id,
                sender_id=user_id,
                type="rsvp",
                message=f"{user_name} is attending {title}",
                related_event_id=event_id,
            ),
            publisher,
        )
    return response


@router.delete("/{event_id}/rsvp", response_model=RsvpResponse)
async def cancel_rsvp(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await _get_event_or_404(db, event_id)
    await event_crud.remove_attendee(db, event_id, current_user.id)
    await db.commit()
    return RsvpResponse(
        message="RSVP cancelled",
        attendees_count=await event_crud.count_attendees(db, event_id),
    )


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db)
):
    """Soft delete by the organizer or an administrator"""
    event = await _get_event_or_404(db, event_id)
    if event.organizer_id != current_user.id and current_user.role not in ADMIN_ROLES:
        raise AuthorizationError("Not authorized to delete this event")

    await event_crud.soft_delete(db, event)
    await db.commit()
    logger.info(f"Event deleted: event_id={event_id}, by={current_user.id}")
    return MessageResponse(message="Event deleted successfully")
