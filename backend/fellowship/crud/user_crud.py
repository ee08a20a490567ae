from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from .base import BaseCRUD
from ..models.user import User
from ..schemas.user import RegisterRequest, ProfileUpdate
from ..core.constants import LEADER_ROLES


class UserCRUD(BaseCRUD[User, RegisterRequest, ProfileUpdate]):
    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Look up an account by its normalized email"""
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalars().first()

    async def get_active(
        self, db: AsyncSession, *, skip: int = 0, limit: Optional[int] = None
    ) -> List[User]:
        """Active members, newest first"""
        query = (
            select(User)
            .where(User.is_active.is_(True))
            .order_by(desc(User.created_at))
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_active_leaders(self, db: AsyncSession) -> List[User]:
        """Active users holding a leader-tier role"""
        result = await db.execute(
            select(User).where(User.role.in_(LEADER_ROLES), User.is_active.is_(True))
        )
        return result.scalars().all()

    async def deactivate_user(self, db: AsyncSession, user: User) -> User:
        """Soft delete"""
        user.is_active = False
        return user


user_crud = UserCRUD(User)
