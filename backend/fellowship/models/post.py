from sqlalchemy import Column, String, Boolean, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, UUIDMixin


class Post(Base, UUIDMixin, TimestampMixin):
    """Community feed post: prayer request, testimony, announcement or celebration"""
    __tablename__ = "posts"

    author_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Content
    title = Column(String(200), nullable=False)
    content = Column(String(2000), nullable=False)
    type = Column(String(20), nullable=False, index=True, comment="prayer | testimony | announcement | celebration")
    testimony_category = Column(String(50), nullable=True, index=True)
    celebration_category = Column(String(50), nullable=True, index=True)
    media_url = Column(Text, nullable=False, default="")
    is_anonymous = Column(Boolean, default=False, nullable=False)

    # Lower-cased title, content and categories; rebuilt on every save
    search_text = Column(Text, nullable=False, default="", index=True)

    # Moderation
    is_active = Column(Boolean, default=True, nullable=False, comment="Soft delete flag")
    is_flagged = Column(Boolean, default=False, nullable=False)

    author = relationship("User", back_populates="posts", lazy="selectin")
    reactions = relationship("PostReaction", back_populates="post", cascade="all, delete-orphan", lazy="selectin")
    comments = relationship(
        "PostComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.created_at",
        lazy="selectin",
    )

    def refresh_search_text(self) -> None:
        parts = [
            self.title or "",
            self.content or "",
            self.testimony_category or "",
            self.celebration_category or "",
        ]
        self.search_text = " ".join(parts).lower()


class PostReaction(Base, UUIDMixin, TimestampMixin):
    """One member's reaction of one kind on a post (set membership row)"""
    __tablename__ = "post_reactions"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", "kind", name="uq_post_user_kind"),
    )

    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    kind = Column(String(20), nullable=False, comment="like | pray | amen | bless | congrats | heart")

    post = relationship("Post", back_populates="reactions")


class PostComment(Base, UUIDMixin, TimestampMixin):
    """Comment on a post"""
    __tablename__ = "post_comments"

    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(String(1000), nullable=False)

    post = relationship("Post", back_populates="comments")
    user = relationship("User", lazy="selectin")
