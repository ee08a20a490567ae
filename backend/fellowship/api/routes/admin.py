from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import require_admin
from ...models.event import Event
from ...models.post import Post
from ...models.user import User
from ...crud.event_crud import event_crud
from ...crud.post_crud import post_crud
from ...crud.user_crud import user_crud
from ...core.exceptions import NotFoundError
from ...schemas.admin import (
    DashboardCounts,
    DashboardStats,
    PostFlagResponse,
    RecentActivity,
    RecentUser,
    RoleUpdateResponse,
)
from ...schemas.common import MessageResponse
from ...schemas.post import PostFlagUpdate
from ...schemas.user import RoleUpdate, UserDetail
from ...services.post_service import serialize_post

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    admin_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Headline counts plus the five newest posts and members"""
    counts = DashboardCounts(
        total_users=await user_crud.count(db, User.is_active.is_(True)),
        total_posts=await post_crud.count(db, Post.is_active.is_(True)),
        total_events=await event_crud.count(db, Event.is_active.is_(True)),
        flagged_posts=await post_crud.count(db, Post.is_flagged.is_(True), Post.is_active.is_(True)),
    )
    recent_posts = await post_crud.get_recent(db, limit=5)
    recent_users = await user_crud.get_active(db, limit=5)

    return DashboardStats(
        stats=counts,
        recent_activity=RecentActivity(
            posts=[serialize_post(post) for post in recent_posts],
            users=[RecentUser.model_validate(user) for user in recent_users],
        ),
    )


@router.get("/users", response_model=List[UserDetail])
async def list_users(
    admin_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    users = await user_crud.get_active(db)
    return [UserDetail.model_validate(user) for user in users]


async def _get_user_or_404(db: AsyncSession, user_id: str) -> User:
    user = await user_crud.get(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.put("/users/{user_id}/role", response_model=RoleUpdateResponse)
async def update_user_role(
    user_id: str,
    data: RoleUpdate,
    admin_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    user = await _get_user_or_404(db, user_id)
    user.role = data.role
    await db.commit()
    logger.info(f"Role updated: user_id={user_id}, role={data.role}, by={admin_user.id}")
    return RoleUpdateResponse(
        message="User role updated successfully",
        user=UserDetail.model_validate(await user_crud.get_fresh(db, user_id)),
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def deactivate_user(
    user_id: str,
    admin_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    user = await _get_user_or_404(db, user_id)
    await user_crud.deactivate_user(db, user)
    await db.commit()
    logger.info(f"User deactivated: user_id={user_id}, by={admin_user.id}")
    return MessageResponse(message="User deactivated successfully")


@router.put("/posts/{post_id}/flag", response_model=PostFlagResponse)
async def flag_post(
    post_id: str,
    data: PostFlagUpdate,
    admin_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    post = await post_crud.get(db, post_id)
    if post is None:
        raise NotFoundError("Post not found")

    post.is_flagged = data.is_flagged
    await db.commit()
    return PostFlagResponse(
        message="Post flag status updated",
        post=serialize_post(await post_crud.get_fresh(db, post_id)),
    )
