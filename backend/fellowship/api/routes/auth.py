from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user
from ...models.user import User
from ...schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserDetail, UserPublic
from ...services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Create an account; an invite code grants its role, ministry and family"""
    logger.info(f"Registration requested: email={data.email}, invite={'yes' if data.invite_code else 'no'}")
    user, token = await auth_service.register(db, data)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    user, token = await auth_service.login(db, data)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.get("/me", response_model=UserDetail)
async def get_me(current_user: User = Depends(get_current_user)):
    """Current user without password"""
    return UserDetail.model_validate(current_user)
