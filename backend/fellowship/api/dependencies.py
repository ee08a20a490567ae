from typing import Optional
from fastapi import Depends
from starlette.requests import HTTPConnection
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError

from ..database.session import get_db
from ..core.constants import ADMIN_ROLES, LEADER_ROLES
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..core.security import verify_token
from ..crud.user_crud import user_crud
from ..models.user import User
from ..services.realtime import Publisher, connection_manager

security = HTTPBearer(auto_error=False)


async def user_from_token(db: AsyncSession, token: str) -> Optional[User]:
    """Active user named by a session token's id claim, or None"""
    try:
        payload = verify_token(token)
    except JWTError:
        return None
    user_id = payload.get("id")
    if not user_id:
        return None
    user = await user_crud.get(db, id=user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    if credentials is None:
        raise AuthenticationError("No token, authorization denied")

    user = await user_from_token(db, credentials.credentials)
    if user is None:
        raise AuthenticationError("Token is not valid")
    return user


def require_roles(*roles: str):
    """Dependency factory: current user must hold one of `roles`"""
    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise AuthorizationError("Access denied. Insufficient permissions.")
        return current_user
    return checker


require_leader = require_roles(*LEADER_ROLES)
require_admin = require_roles(*ADMIN_ROLES)


def get_publisher(connection: HTTPConnection) -> Publisher:
    """Realtime publisher installed on app state at startup"""
    return getattr(connection.app.state, "publisher", connection_manager)
