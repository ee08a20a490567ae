from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from .base import BaseCRUD
from ..models.mentorship import MentorshipRequest, MentorshipMessage
from ..schemas.mentorship import MentorshipCreate


class MentorshipCRUD(BaseCRUD[MentorshipRequest, MentorshipCreate, dict]):

    async def create_request(
        self, db: AsyncSession, data: MentorshipCreate, requester_id: str
    ) -> MentorshipRequest:
        db_request = MentorshipRequest(requester_id=requester_id, **data.model_dump())
        db.add(db_request)
        # Transaction management moved to upper layer
        return db_request

    async def list_for_requester(
        self, db: AsyncSession, requester_id: str
    ) -> List[MentorshipRequest]:
        result = await db.execute(
            select(MentorshipRequest)
            .where(
                MentorshipRequest.requester_id == requester_id,
                MentorshipRequest.is_active.is_(True),
            )
            .order_by(desc(MentorshipRequest.created_at))
        )
        return result.scalars().all()

    async def list_active(
        self, db: AsyncSession, status: Optional[str] = None
    ) -> List[MentorshipRequest]:
        """Leader dashboard, newest first"""
        query = select(MentorshipRequest).where(MentorshipRequest.is_active.is_(True))
        if status:
            query = query.where(MentorshipRequest.status == status)
        result = await db.execute(query.order_by(desc(MentorshipRequest.created_at)))
        return result.scalars().all()

    async def add_message(
        self, db: AsyncSession, request_id: str, sender_id: str, content: str
    ) -> MentorshipMessage:
        message = MentorshipMessage(request_id=request_id, sender_id=sender_id, content=content)
        db.add(message)
        await db.flush()
        return message


mentorship_crud = MentorshipCRUD(MentorshipRequest)
