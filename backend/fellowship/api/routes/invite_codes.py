from typing import List
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import require_admin
from ...models.user import User
from ...crud.invite_crud import invite_code_crud
from ...core.constants import INVITE_ROLES
from ...core.exceptions import (
    DuplicateResourceError,
    ExpiredError,
    InvalidInviteCodeError,
    NotFoundError,
    ValidationError,
)
from ...schemas.invite_code import (
    InviteCodeCreate,
    InviteCodeCreateResponse,
    InviteCodeResponse,
    InviteValidationResponse,
)
from ...services.auth_service import auth_service

router = APIRouter(prefix="/invite-codes", tags=["invite-codes"])
logger = logging.getLogger(__name__)


@router.post("", response_model=InviteCodeCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_invite_code(
    data: InviteCodeCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Issue a single-use code granting a leader role"""
    if data.role not in INVITE_ROLES:
        raise ValidationError("Invalid role for invite code")
    if await invite_code_crud.get_by_code(db, data.code):
        raise DuplicateResourceError("Invite code already exists")

    invite = await invite_code_crud.create_code(db, data, current_user.id)
    await db.commit()
    invite = await invite_code_crud.get_fresh(db, invite.id)
    logger.info(f"Invite code created: code={invite.code}, role={invite.role}, by={current_user.id}")
    return InviteCodeCreateResponse(
        message="Invite code created successfully",
        invite_code=InviteCodeResponse.model_validate(invite),
    )


@router.get("", response_model=List[InviteCodeResponse])
async def list_invite_codes(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    invites = await invite_code_crud.list_all(db)
    return [InviteCodeResponse.model_validate(invite) for invite in invites]


@router.get("/validate/{code}", response_model=InviteValidationResponse)
async def validate_invite_code(
    code: str,
    db: AsyncSession = Depends(get_db)
):
    """Public pre-registration check"""
    try:
        invite = await auth_service.resolve_invite(db, code)
    except InvalidInviteCodeError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"valid": False, "message": "Invalid invite code"},
        )
    except ExpiredError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"valid": False, "message": e.message},
        )

    return InviteValidationResponse(
        valid=True,
        role=invite.role,
        ministry=invite.ministry,
        description=invite.description,
    )


@router.delete("/{invite_id}")
async def deactivate_invite_code(
    invite_id: str,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    invite = await invite_code_crud.get(db, invite_id)
    if invite is None:
        raise NotFoundError("Invite code not found")

    await invite_code_crud.deactivate(db, invite)
    await db.commit()
    invite = await invite_code_crud.get_fresh(db, invite_id)
    logger.info(f"Invite code deactivated: code={invite.code}")
    return {
        "message": "Invite code deactivated successfully",
        "inviteCode": InviteCodeResponse.model_validate(invite).model_dump(mode="json", by_alias=True),
    }
