"""
Prayer statistics for the tracker dashboard.

Streaks are counted in server local calendar days. Only the most recent
entries (STREAK_LOOKBACK of them) are consulted, so the current streak can
never exceed that many days.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..crud.prayer_crud import prayer_crud
from ..schemas.prayer import PrayerStats
from ..utils.data_utils import local_date, local_today, start_of_week


def distinct_local_dates(timestamps: Iterable[datetime]) -> Set[date]:
    return {local_date(ts) for ts in timestamps}


def calculate_current_streak(dates: Set[date], today: date, lookback: int = 30) -> int:
    """Consecutive days with an entry, walking back from today; stops at the first gap."""
    streak = 0
    for offset in range(lookback):
        if today - timedelta(days=offset) in dates:
            streak += 1
        else:
            break
    return streak


def estimate_longest_streak(current_streak: int, total_prayers: int) -> int:
    # Approximation: no history walk, one week of streak credited per seven entries
    return max(current_streak, total_prayers // 7)


class PrayerStatsService:

    async def compute_stats(
        self, db: AsyncSession, user_id: str, now: Optional[datetime] = None
    ) -> PrayerStats:
        total_prayers = await prayer_crud.count_for_user(db, user_id)
        answered_prayers = await prayer_crud.count_for_user(db, user_id, answered=True)
        total_duration = await prayer_crud.total_duration(db, user_id)
        this_week_prayers = await prayer_crud.count_for_user(
            db, user_id, since=start_of_week(now)
        )

        recent = await prayer_crud.recent_timestamps(db, user_id, settings.STREAK_LOOKBACK)
        current_streak = calculate_current_streak(
            distinct_local_dates(recent),
            local_today(now),
            settings.STREAK_LOOKBACK,
        )

        return PrayerStats(
            total_prayers=total_prayers,
            total_duration=total_duration,
            answered_prayers=answered_prayers,
            weekly_goal=settings.WEEKLY_PRAYER_GOAL,
            current_streak=current_streak,
            longest_streak=estimate_longest_streak(current_streak, total_prayers),
            this_week_prayers=this_week_prayers,
        )


# Singleton instance
prayer_stats_service = PrayerStatsService()
