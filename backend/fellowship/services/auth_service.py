import logging
from datetime import datetime, timezone
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import DEFAULT_ROLE, DEFAULT_FELLOWSHIP_ROLE
from ..core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    ExpiredError,
    InvalidInviteCodeError,
)
from ..core.security import create_session_token, hash_password, verify_password
from ..crud.invite_crud import invite_code_crud
from ..crud.user_crud import user_crud
from ..models.invite_code import InviteCode
from ..models.user import User
from ..schemas.user import LoginRequest, RegisterRequest
from ..utils.data_utils import as_utc

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Invite-gated registration and password login"""

    async def resolve_invite(self, db: AsyncSession, code: str) -> InviteCode:
        """
        Redeemable invite for `code`.
        The unused/active lookup runs before the expiry check, so a code that is
        both used and expired reports as invalid.
        """
        invite = await invite_code_crud.get_active_unused_by_code(db, code)
        if invite is None:
            raise InvalidInviteCodeError()
        if invite.expires_at is not None and as_utc(invite.expires_at) < datetime.now(timezone.utc):
            raise ExpiredError()
        return invite

    async def register(self, db: AsyncSession, data: RegisterRequest) -> Tuple[User, str]:
        if await user_crud.get_by_email(db, data.email):
            raise DuplicateResourceError("User already exists with this email")

        role, ministry, family_id = DEFAULT_ROLE, "", None
        invite_code = (data.invite_code or "").upper() or None
        if invite_code:
            invite = await self.resolve_invite(db, invite_code)
            role = invite.role
            ministry = invite.ministry or ""
            family_id = invite.family_id or None

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            role=role,
            ministry=ministry,
            family_id=family_id,
            fellowship_role=data.fellowship_role or DEFAULT_FELLOWSHIP_ROLE,
        )
        db.add(user)
        try:
            await db.flush()
            if invite_code and not await invite_code_crud.consume(db, invite_code, user.id):
                # another registration consumed the code after our lookup
                logger.warning(f"Invite code {invite_code} consumed concurrently; registration rolled back")
                raise InvalidInviteCodeError()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateResourceError("User already exists with this email")
        except Exception:
            await db.rollback()
            raise

        logger.info(f"User registered: user_id={user.id}, role={user.role}")
        return user, create_session_token(user)

    async def login(self, db: AsyncSession, data: LoginRequest) -> Tuple[User, str]:
        user = await user_crud.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info(f"User logged in: user_id={user.id}")
        return user, create_session_token(user)


# Singleton instance
auth_service = AuthService()
