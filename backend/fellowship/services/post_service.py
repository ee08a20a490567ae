from typing import Dict, List

from ..core.constants import (
    REACTION_AMEN,
    REACTION_BLESS,
    REACTION_CONGRATS,
    REACTION_HEART,
    REACTION_LIKE,
    REACTION_PRAY,
)
from ..models.post import Post, PostComment
from ..schemas.common import UserSummary
from ..schemas.post import CommentResponse, PostResponse

# Response field holding the user ids for each reaction kind
REACTION_FIELDS = {
    REACTION_LIKE: "likes",
    REACTION_PRAY: "prayed_for",
    REACTION_AMEN: "amen_reactions",
    REACTION_BLESS: "blessing_reactions",
    REACTION_CONGRATS: "congrats_reactions",
    REACTION_HEART: "heart_reactions",
}


def serialize_comment(comment: PostComment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        user=UserSummary.model_validate(comment.user) if comment.user else None,
        content=comment.content,
        created_at=comment.created_at,
    )


def serialize_post(post: Post) -> PostResponse:
    """Response shape for a post; anonymous posts carry no author."""
    buckets: Dict[str, List[str]] = {field: [] for field in REACTION_FIELDS.values()}
    for reaction in post.reactions:
        field = REACTION_FIELDS.get(reaction.kind)
        if field:
            buckets[field].append(reaction.user_id)

    author = None
    if not post.is_anonymous and post.author is not None:
        author = UserSummary.model_validate(post.author)

    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        type=post.type,
        testimony_category=post.testimony_category,
        celebration_category=post.celebration_category,
        author=author,
        is_anonymous=post.is_anonymous,
        media_url=post.media_url or "",
        comments=[serialize_comment(c) for c in post.comments],
        is_flagged=post.is_flagged,
        created_at=post.created_at,
        updated_at=post.updated_at,
        **buckets,
    )
