from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field, field_validator, model_validator

from .common import CamelModel, UserSummary

PostTypeLiteral = Literal["prayer", "testimony", "announcement", "celebration"]
TestimonyCategoryLiteral = Literal[
    "Healing", "Provision", "Breakthrough", "Spiritual Growth", "Deliverance", "Other"
]
CelebrationCategoryLiteral = Literal[
    "Birthday", "Graduation", "New Job", "Achievement", "Engagement", "Other"
]


class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=2000)
    type: PostTypeLiteral
    testimony_category: Optional[TestimonyCategoryLiteral] = None
    celebration_category: Optional[CelebrationCategoryLiteral] = None
    is_anonymous: bool = False
    media_url: str = Field("", max_length=2000)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @model_validator(mode="after")
    def drop_foreign_categories(self):
        # categories only apply to their own post type
        if self.type != "testimony":
            self.testimony_category = None
        if self.type != "celebration":
            self.celebration_category = None
        return self


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=1000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v


class CommentResponse(CamelModel):
    id: str
    user: Optional[UserSummary] = None
    content: str
    created_at: datetime


class PostResponse(CamelModel):
    id: str
    title: str
    content: str
    type: str
    testimony_category: Optional[str] = None
    celebration_category: Optional[str] = None
    author: Optional[UserSummary] = None
    is_anonymous: bool = False
    media_url: str = ""
    likes: List[str] = Field(default_factory=list)
    prayed_for: List[str] = Field(default_factory=list)
    amen_reactions: List[str] = Field(default_factory=list)
    blessing_reactions: List[str] = Field(default_factory=list)
    congrats_reactions: List[str] = Field(default_factory=list)
    heart_reactions: List[str] = Field(default_factory=list)
    comments: List[CommentResponse] = Field(default_factory=list)
    is_flagged: bool = False
    created_at: datetime
    updated_at: datetime


class PostCreateResponse(CamelModel):
    message: str
    post: PostResponse


class PostListResponse(CamelModel):
    posts: List[PostResponse]
    total: int
    total_pages: int
    current_page: int


class ReactionResponse(CamelModel):
    message: str
    kind: str
    reacted: bool
    count: int


class CommentListResponse(CamelModel):
    message: str
    comments: List[CommentResponse]


class PostFlagUpdate(CamelModel):
    is_flagged: bool
