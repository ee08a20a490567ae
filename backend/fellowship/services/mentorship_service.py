from typing import Optional

from ..models.mentorship import MentorshipRequest
from ..models.user import User
from ..schemas.common import UserSummary
from ..schemas.mentorship import MentorshipMessageResponse, MentorshipResponse


def other_party(request: MentorshipRequest, sender_id: str) -> Optional[str]:
    """Who should hear about a thread message from sender_id."""
    if request.requester_id == sender_id:
        return request.assigned_leader_id
    return request.requester_id


def serialize_request(request: MentorshipRequest, viewer: User) -> MentorshipResponse:
    """Anonymous requests hide the requester from everyone but the requester."""
    requester = None
    if request.requester is not None and (
        not request.is_anonymous or request.requester_id == viewer.id
    ):
        requester = UserSummary.model_validate(request.requester)

    return MentorshipResponse(
        id=request.id,
        requester=requester,
        assigned_leader=(
            UserSummary.model_validate(request.assigned_leader)
            if request.assigned_leader is not None else None
        ),
        is_anonymous=request.is_anonymous,
        topic=request.topic,
        details=request.details or "",
        preferred_times=list(request.preferred_times or []),
        status=request.status,
        scheduled_at=request.scheduled_at,
        private_chat=[MentorshipMessageResponse.model_validate(m) for m in request.messages],
        created_at=request.created_at,
        updated_at=request.updated_at,
    )
