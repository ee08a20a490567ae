from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, desc

from .base import BaseCRUD
from ..models.base import utcnow
from ..models.invite_code import InviteCode
from ..schemas.invite_code import InviteCodeCreate


class InviteCodeCRUD(BaseCRUD[InviteCode, InviteCodeCreate, dict]):

    async def get_by_code(self, db: AsyncSession, code: str) -> Optional[InviteCode]:
        """Any invite with this code, used or not"""
        result = await db.execute(
            select(InviteCode).where(InviteCode.code == code.strip().upper())
        )
        return result.scalars().first()

    async def get_active_unused_by_code(
        self, db: AsyncSession, code: str
    ) -> Optional[InviteCode]:
        """Redeemable candidate: active, unused, matching code. Expiry is checked by the caller."""
        result = await db.execute(
            select(InviteCode).where(
                InviteCode.code == code.strip().upper(),
                InviteCode.is_active.is_(True),
                InviteCode.used_by_id.is_(None),
            )
        )
        return result.scalars().first()

    async def create_code(
        self, db: AsyncSession, data: InviteCodeCreate, created_by_id: str
    ) -> InviteCode:
        db_invite = InviteCode(
            code=data.code,
            role=data.role,
            ministry=data.ministry or "",
            family_id=data.family_id or None,
            expires_at=data.expires_at,
            description=data.description or "",
            created_by_id=created_by_id,
        )
        db.add(db_invite)
        # Transaction management moved to upper layer
        return db_invite

    async def consume(self, db: AsyncSession, code: str, user_id: str) -> bool:
        """
        Mark the invite used by user_id with a single conditional UPDATE.
        Returns False when no row matched, i.e. someone else consumed it first.
        The user row must already be flushed so the foreign key resolves.
        """
        result = await db.execute(
            update(InviteCode)
            .where(
                InviteCode.code == code.strip().upper(),
                InviteCode.used_by_id.is_(None),
                InviteCode.is_active.is_(True),
            )
            .values(used_by_id=user_id, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_all(self, db: AsyncSession) -> List[InviteCode]:
        """All invites, newest first"""
        result = await db.execute(select(InviteCode).order_by(desc(InviteCode.created_at)))
        return result.scalars().all()

    async def deactivate(self, db: AsyncSession, invite: InviteCode) -> InviteCode:
        invite.is_active = False
        return invite


invite_code_crud = InviteCodeCRUD(InviteCode)
