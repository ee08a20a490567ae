from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, desc

from .base import BaseCRUD
from ..models.post import Post, PostReaction, PostComment
from ..schemas.post import PostCreate


class PostCRUD(BaseCRUD[Post, PostCreate, dict]):

    async def create_post(
        self,
        db: AsyncSession,
        post_data: PostCreate,
        author_id: str,
    ) -> Post:
        """New feed post; search text is derived from its content"""
        db_post = Post(author_id=author_id, **post_data.model_dump())
        db_post.refresh_search_text()
        db.add(db_post)
        # Transaction management moved to upper layer
        return db_post

    async def get_active(self, db: AsyncSession, post_id: str) -> Optional[Post]:
        result = await db.execute(
            select(Post).where(Post.id == post_id, Post.is_active.is_(True))
        )
        return result.scalars().first()

    async def _page(
        self, db: AsyncSession, criteria: list, page: int, limit: int
    ) -> Tuple[List[Post], int]:
        result = await db.execute(
            select(Post)
            .where(*criteria)
            .order_by(desc(Post.created_at))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total = await self.count(db, *criteria)
        return result.scalars().all(), total

    async def get_feed(
        self,
        db: AsyncSession,
        *,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        """Active posts newest first, optionally one type"""
        criteria = [Post.is_active.is_(True)]
        if type and type != "all":
            criteria.append(Post.type == type)
        return await self._page(db, criteria, page, limit)

    async def search(
        self,
        db: AsyncSession,
        q: str,
        *,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        """Case-insensitive substring match over the search text"""
        criteria = [
            Post.is_active.is_(True),
            Post.search_text.contains(q.strip().lower(), autoescape=True),
        ]
        if type and type != "all":
            criteria.append(Post.type == type)
        return await self._page(db, criteria, page, limit)

    async def get_testimonies(
        self,
        db: AsyncSession,
        *,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        """Testimony archive, optionally one category"""
        criteria = [Post.is_active.is_(True), Post.type == "testimony"]
        if category and category != "all":
            criteria.append(Post.testimony_category == category)
        return await self._page(db, criteria, page, limit)

    async def get_recent(self, db: AsyncSession, limit: int = 5) -> List[Post]:
        posts, _ = await self._page(db, [Post.is_active.is_(True)], 1, limit)
        return posts

    # Reactions

    async def has_reaction(
        self, db: AsyncSession, post_id: str, user_id: str, kind: str
    ) -> bool:
        result = await db.execute(
            select(PostReaction.id).where(
                PostReaction.post_id == post_id,
                PostReaction.user_id == user_id,
                PostReaction.kind == kind,
            )
        )
        return result.first() is not None

    async def add_reaction(
        self, db: AsyncSession, post_id: str, user_id: str, kind: str
    ) -> PostReaction:
        reaction = PostReaction(post_id=post_id, user_id=user_id, kind=kind)
        db.add(reaction)
        await db.flush()
        return reaction

    async def remove_reaction(
        self, db: AsyncSession, post_id: str, user_id: str, kind: str
    ) -> None:
        await db.execute(
            delete(PostReaction)
            .where(
                PostReaction.post_id == post_id,
                PostReaction.user_id == user_id,
                PostReaction.kind == kind,
            )
            .execution_options(synchronize_session=False)
        )

    async def count_reactions(self, db: AsyncSession, post_id: str, kind: str) -> int:
        result = await db.execute(
            select(func.count(PostReaction.id)).where(
                PostReaction.post_id == post_id,
                PostReaction.kind == kind,
            )
        )
        return result.scalar() or 0

    # Comments

    async def add_comment(
        self, db: AsyncSession, post_id: str, user_id: str, content: str
    ) -> PostComment:
        comment = PostComment(post_id=post_id, user_id=user_id, content=content)
        db.add(comment)
        await db.flush()
        return comment

    async def soft_delete(self, db: AsyncSession, post: Post) -> Post:
        post.is_active = False
        return post


post_crud = PostCRUD(Post)
