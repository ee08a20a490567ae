"""Reaction bookkeeping on posts: one row per (post, user, kind)."""
import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud.post_crud import post_crud

logger = logging.getLogger(__name__)


class ReactionService:

    async def toggle(
        self, db: AsyncSession, post_id: str, user_id: str, kind: str
    ) -> Tuple[bool, int]:
        """Remove the reaction if present, else add it. Returns (reacted, count)."""
        if await post_crud.has_reaction(db, post_id, user_id, kind):
            await post_crud.remove_reaction(db, post_id, user_id, kind)
            await db.commit()
            reacted = False
        else:
            reacted = await self._insert(db, post_id, user_id, kind)
        return reacted, await post_crud.count_reactions(db, post_id, kind)

    async def add(
        self, db: AsyncSession, post_id: str, user_id: str, kind: str
    ) -> Tuple[bool, int]:
        """Idempotent add. Returns (newly_added, count)."""
        added = False
        if not await post_crud.has_reaction(db, post_id, user_id, kind):
            added = await self._insert(db, post_id, user_id, kind)
        return added, await post_crud.count_reactions(db, post_id, kind)

    async def _insert(self, db: AsyncSession, post_id: str, user_id: str, kind: str) -> bool:
        try:
            await post_crud.add_reaction(db, post_id, user_id, kind)
            await db.commit()
        except IntegrityError:
            # same reaction landed concurrently; membership is what matters
            await db.rollback()
            logger.info(f"Duplicate {kind} reaction ignored: post_id={post_id}, user_id={user_id}")
            return False
        return True


# Singleton instance
reaction_service = ReactionService()
