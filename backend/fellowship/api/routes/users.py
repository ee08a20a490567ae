from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user
from ...models.user import User
from ...crud.user_crud import user_crud
from ...core.exceptions import ValidationError
from ...core.security import hash_password, verify_password
from ...schemas.common import MessageResponse, UserSummary
from ...schemas.user import PasswordChange, ProfileUpdate, ProfileUpdateResponse, UserDetail

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[UserSummary])
async def list_members(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Member directory: active members, newest first"""
    members = await user_crud.get_active(db)
    return [UserSummary.model_validate(member) for member in members]


@router.get("/profile", response_model=UserDetail)
async def get_profile(current_user: User = Depends(get_current_user)):
    return UserDetail.model_validate(current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update name, bio, fellowship role or profile photo"""
    await user_crud.update(
        db,
        db_obj=current_user,
        obj_in=profile_data.model_dump(exclude_unset=True, exclude_none=True),
    )
    await db.commit()
    user = await user_crud.get_fresh(db, current_user.id)
    logger.info(f"Profile updated: user_id={user.id}")
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserDetail.model_validate(user),
    )


@router.put("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    if not verify_password(data.current_password, current_user.password_hash):
        raise ValidationError("Current password is incorrect")

    current_user.password_hash = hash_password(data.new_password)
    await db.commit()
    logger.info(f"Password changed: user_id={current_user.id}")
    return MessageResponse(message="Password changed successfully")
