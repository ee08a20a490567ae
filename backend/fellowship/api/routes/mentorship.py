from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user, get_publisher, require_leader
from ...models.mentorship import MentorshipRequest
from ...models.user import User
from ...crud.mentorship_crud import mentorship_crud
from ...crud.user_crud import user_crud
from ...core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ...schemas.mentorship import (
    MentorshipChatResponse,
    MentorshipCreate,
    MentorshipEnvelope,
    MentorshipListResponse,
    MentorshipMessageCreate,
    MentorshipMessageResponse,
    MentorshipSchedule,
)
from ...schemas.notification import NotificationCreate
from ...services.mentorship_service import other_party, serialize_request
from ...services.notification_service import notification_service
from ...services.realtime import Publisher

router = APIRouter(prefix="/mentorship", tags=["mentorship"])
logger = logging.getLogger(__name__)


async def _get_request_or_404(db: AsyncSession, request_id: str) -> MentorshipRequest:
    request = await mentorship_crud.get(db, request_id)
    if request is None or not request.is_active:
        raise NotFoundError("Not found")
    return request


async def _update_status(
    db: AsyncSession,
    publisher: Publisher,
    request_id: str,
    leader: User,
    new_status: str,
    reply: str,
    message: Optional[str],
    *,
    assign: bool = False,
    **fields,
) -> MentorshipEnvelope:
    """Apply a leader action, then tell the requester when `message` is given."""
    request = await _get_request_or_404(db, request_id)
    leader_id = leader.id
    request.status = new_status
    if assign:
        request.assigned_leader_id = leader_id
    for field, value in fields.items():
        setattr(request, field, value)
    await db.commit()

    request = await mentorship_crud.get_fresh(db, request_id)
    requester_id = request.requester_id
    envelope = MentorshipEnvelope(message=reply, request=serialize_request(request, leader))
    logger.info(f"Mentorship request {request_id} -> {new_status} by {leader_id}")
    if message and requester_id != leader_id:
        await notification_service.notify(
            db,
            NotificationCreate(
                recipient_id=requester_id,
                sender_id=leader_id,
                type="mentorship_updated",
                message=message,
            ),
            publisher,
        )
    return envelope


@router.post("", response_model=MentorshipEnvelope, status_code=status.HTTP_201_CREATED)
async def submit_request(
    data: MentorshipCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Submit a request and notify every active leader"""
    user_id = current_user.id
    new_request = await mentorship_crud.create_request(db, data, user_id)
    await db.commit()
    request_id = new_request.id

    request = await mentorship_crud.get_fresh(db, request_id)
    response = MentorshipEnvelope(
        message="Request submitted",
        request=serialize_request(request, current_user),
    )

    leaders = await user_crud.get_active_leaders(db)
    leader_ids = [leader.id for leader in leaders if leader.id != user_id]
    anonymous = "anonymous " if data.is_anonymous else ""
    await notification_service.notify_many(
        db,
        leader_ids,
        sender_id=user_id,
        type="mentorship_submitted",
        message=f"New {anonymous}mentorship/counseling request: {data.topic}",
        publisher=publisher,
    )
    return response


@router.get("/me", response_model=MentorshipListResponse)
async def my_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    requests = await mentorship_crud.list_for_requester(db, current_user.id)
    return MentorshipListResponse(
        requests=[serialize_request(r, current_user) for r in requests]
    )


@router.get("/manage", response_model=MentorshipListResponse)
async def leader_dashboard(
    status_filter: Optional[str] = Query(None, alias="status"),
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db)
):
    requests = await mentorship_crud.list_active(db, status=status_filter)
    return MentorshipListResponse(
        requests=[serialize_request(r, current_user) for r in requests]
    )


@router.get("/{request_id}", response_model=MentorshipEnvelope)
async def get_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    request = await _get_request_or_404(db, request_id)
    if not request.is_party(current_user):
        raise AuthorizationError("Not authorized")
    return MentorshipEnvelope(request=serialize_request(request, current_user))


@router.put("/{request_id}/accept", response_model=MentorshipEnvelope)
async def accept_request(
    request_id: str,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Assign the current leader"""
    return await _update_status(
        db, publisher, request_id, current_user, "accepted", "Accepted",
        "Your mentorship request has been accepted", assign=True,
    )


@router.put("/{request_id}/decline", response_model=MentorshipEnvelope)
async def decline_request(
    request_id: str,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    return await _update_status(
        db, publisher, request_id, current_user, "declined", "Declined",
        "Your mentorship request has been declined",
    )


@router.put("/{request_id}/schedule", response_model=MentorshipEnvelope)
async def schedule_request(
    request_id: str,
    data: MentorshipSchedule,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Set the session time; the first scheduling leader is assigned if nobody is yet"""
    existing = await _get_request_or_404(db, request_id)
    return await _update_status(
        db, publisher, request_id, current_user, "scheduled", "Scheduled",
        "Your mentorship session has been scheduled",
        assign=existing.assigned_leader_id is None,
        scheduled_at=data.scheduled_at,
    )


@router.put("/{request_id}/complete", response_model=MentorshipEnvelope)
async def complete_request(
    request_id: str,
    current_user: User = Depends(require_leader),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    return await _update_status(
        db, publisher, request_id, current_user, "completed", "Completed", None
    )


@router.post(
    "/{request_id}/message",
    response_model=MentorshipChatResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    request_id: str,
    data: MentorshipMessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Private thread message between the parties"""
    content = data.content.strip()
    if not content:
        raise ValidationError("Content required")

    request = await _get_request_or_404(db, request_id)
    if not request.is_party(current_user):
        raise AuthorizationError("Not authorized")

    sender_id = current_user.id
    recipient_id = other_party(request, sender_id)
    await mentorship_crud.add_message(db, request_id, sender_id, content)
    await db.commit()

    request = await mentorship_crud.get_fresh(db, request_id)
    response = MentorshipChatResponse(
        message="Sent",
        chat=[MentorshipMessageResponse.model_validate(m) for m in request.messages],
    )
    if recipient_id and recipient_id != sender_id:
        await notification_service.notify(
            db,
            NotificationCreate(
                recipient_id=recipient_id,
                sender_id=sender_id,
                type="mentorship_message",
                message="New message in your mentorship thread",
            ),
            publisher,
        )
    return response
