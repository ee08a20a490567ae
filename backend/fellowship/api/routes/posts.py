from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ...database.session import get_db
from ...api.dependencies import get_current_user, get_publisher
from ...models.user import User
from ...crud.post_crud import post_crud
from ...core.constants import (
    ADMIN_ROLES,
    CELEBRATION_REACTIONS,
    REACTION_LIKE,
    REACTION_PRAY,
)
from ...core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ...schemas.common import MessageResponse
from ...schemas.notification import NotificationCreate
from ...schemas.post import (
    CommentCreate,
    CommentListResponse,
    PostCreate,
    PostCreateResponse,
    PostListResponse,
    PostResponse,
    ReactionResponse,
)
from ...services.notification_service import notification_service
from ...services.post_service import serialize_comment, serialize_post
from ...services.reactions import reaction_service
from ...services.realtime import Publisher
from ...utils.data_utils import total_pages

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


def _page_response(posts, total: int, page: int, limit: int) -> PostListResponse:
    return PostListResponse(
        posts=[serialize_post(post) for post in posts],
        total=total,
        total_pages=total_pages(total, limit),
        current_page=page,
    )


async def _get_post_or_404(db: AsyncSession, post_id: str):
    post = await post_crud.get_active(db, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


async def _notify_author(
    db: AsyncSession,
    publisher: Publisher,
    *,
    author_id: str,
    sender: User,
    type: str,
    message: str,
    post_id: str,
    comment_id: Optional[str] = None,
) -> None:
    if author_id == sender.id:
        return
    await notification_service.notify(
        db,
        NotificationCreate(
            recipient_id=author_id,
            sender_id=sender.id,
            type=type,
            message=message,
            related_post_id=post_id,
            related_comment_id=comment_id,
        ),
        publisher,
    )


@router.get("", response_model=PostListResponse)
async def get_feed(
    type: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Active posts newest first; type=all or omitted for every type"""
    posts, total = await post_crud.get_feed(db, type=type, page=page, limit=limit)
    return _page_response(posts, total, page, limit)


@router.get("/search", response_model=PostListResponse)
async def search_posts(
    q: str = Query(..., min_length=1),
    type: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    posts, total = await post_crud.search(db, q, type=type, page=page, limit=limit)
    return _page_response(posts, total, page, limit)


@router.get("/testimonies", response_model=PostListResponse)
async def get_testimony_archive(
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    posts, total = await post_crud.get_testimonies(db, category=category, page=page, limit=limit)
    return _page_response(posts, total, page, limit)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return serialize_post(await _get_post_or_404(db, post_id))


@router.post("", response_model=PostCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    new_post = await post_crud.create_post(db, post_data, current_user.id)
    await db.commit()
    logger.info(f"Post created: user_id={current_user.id}, post_id={new_post.id}, type={new_post.type}")
    post = await post_crud.get_fresh(db, new_post.id)
    return PostCreateResponse(message="Post created successfully", post=serialize_post(post))


@router.post("/{post_id}/like", response_model=ReactionResponse)
async def toggle_like(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    post = await _get_post_or_404(db, post_id)
    author_id, user_id, user_name = post.author_id, current_user.id, current_user.name

    reacted, count = await reaction_service.toggle(db, post_id, user_id, REACTION_LIKE)
    response = ReactionResponse(
        message="Post like status updated", kind=REACTION_LIKE, reacted=reacted, count=count
    )
    if reacted:
        await _notify_author(
            db, publisher,
            author_id=author_id, sender=current_user, type="like",
            message=f"{user_name} liked your post", post_id=post_id,
        )
    return response


@router.post("/{post_id}/pray", response_model=ReactionResponse)
async def pray_for_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Record that the current user prayed; repeating it changes nothing"""
    post = await _get_post_or_404(db, post_id)
    author_id, user_id, user_name = post.author_id, current_user.id, current_user.name

    added, count = await reaction_service.add(db, post_id, user_id, REACTION_PRAY)
    response = ReactionResponse(message="Prayer recorded", kind=REACTION_PRAY, reacted=True, count=count)
    if added:
        await _notify_author(
            db, publisher,
            author_id=author_id, sender=current_user, type="prayer",
            message=f"{user_name} prayed for your request", post_id=post_id,
        )
    return response


@router.post("/{post_id}/react/{kind}", response_model=ReactionResponse)
async def toggle_celebration_reaction(
    post_id: str,
    kind: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    """Toggle amen, bless, congrats or heart"""
    if kind not in CELEBRATION_REACTIONS:
        raise ValidationError(f"Unknown reaction: {kind}")
    post = await _get_post_or_404(db, post_id)
    author_id, user_id, user_name = post.author_id, current_user.id, current_user.name

    reacted, count = await reaction_service.toggle(db, post_id, user_id, kind)
    response = ReactionResponse(message="Reaction updated", kind=kind, reacted=reacted, count=count)
    if reacted:
        await _notify_author(
            db, publisher,
            author_id=author_id, sender=current_user, type="like",
            message=f"{user_name} reacted to your post", post_id=post_id,
        )
    return response


@router.post("/{post_id}/comment", response_model=CommentListResponse)
async def add_comment(
    post_id: str,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    publisher: Publisher = Depends(get_publisher)
):
    post = await _get_post_or_404(db, post_id)
    author_id, user_name = post.author_id, current_user.name

    comment = await post_crud.add_comment(db, post_id, current_user.id, data.content)
    comment_id = comment.id
    await db.commit()

    post = await post_crud.get_fresh(db, post_id)
    response = CommentListResponse(
        message="Comment added successfully",
        comments=[serialize_comment(c) for c in post.comments],
    )
    await _notify_author(
        db, publisher,
        author_id=author_id, sender=current_user, type="comment",
        message=f"{user_name} commented on your post", post_id=post_id, comment_id=comment_id,
    )
    return response


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Soft delete by the author or an administrator"""
    post = await _get_post_or_404(db, post_id)
    if post.author_id != current_user.id and current_user.role not in ADMIN_ROLES:
        raise AuthorizationError("Not authorized to delete this post")

    await post_crud.soft_delete(db, post)
    await db.commit()
    logger.info(f"Post deleted: post_id={post_id}, by={current_user.id}")
    return MessageResponse(message="Post deleted successfully")
