from typing import List
from datetime import datetime

from .common import CamelModel
from .post import PostResponse
from .user import UserDetail


class DashboardCounts(CamelModel):
    total_users: int
    total_posts: int
    total_events: int
    flagged_posts: int


class RecentUser(CamelModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime


class RecentActivity(CamelModel):
    posts: List[PostResponse]
    users: List[RecentUser]


class DashboardStats(CamelModel):
    stats: DashboardCounts
    recent_activity: RecentActivity


class RoleUpdateResponse(CamelModel):
    message: str
    user: UserDetail


class PostFlagResponse(CamelModel):
    message: str
    post: PostResponse
