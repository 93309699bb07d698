# services/achievement.py
import logging
from datetime import date, datetime, time, timezone, timedelta
from typing import Optional, List, Dict
from uuid import UUID
from sqlalchemy.orm import Session

from wellness.core.config import settings
from wellness.core.exceptions import DatabaseError
from wellness.crud.achievement import crud_achievement
from wellness.crud.game_result import crud_game_result
from wellness.crud.journal_entry import crud_journal_entry
from wellness.crud.mood_analysis import crud_mood_analysis
from wellness.crud.mood_entry import crud_mood_entry
from wellness.data.achievement_catalog import (
    ACHIEVEMENT_CATALOG,
    POSITIVE_MOODS,
    ProgressMetric,
)
from wellness.models.achievement import Achievement

logger = logging.getLogger(__name__)


def to_utc_date(value: datetime) -> date:
    """Calendar day of a timestamp in UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


class AchievementService:
    """Evaluates the achievement catalog against a user's activity."""

    def __init__(
        self,
        streak_lookback_days: int = 30,
        positive_mood_window_days: int = 7,
    ):
        self.streak_lookback_days = streak_lookback_days
        self.positive_mood_window_days = positive_mood_window_days

    # =====================================================================
    # PROGRESS
    # =====================================================================

    def calculate_mood_streak(self, db: Session, user_id: UUID, today: date) -> int:
        """
        Count consecutive days with at least one mood entry, scanning back
        from `today` and stopping at the first day without one.
        """
        first_day = today - timedelta(days=self.streak_lookback_days - 1)
        since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)
        timestamps = crud_mood_entry.get_timestamps_since(db, user_id=user_id, since=since)
        days_with_entries = {to_utc_date(ts) for ts in timestamps}

        streak = 0
        for offset in range(self.streak_lookback_days):
            if today - timedelta(days=offset) not in days_with_entries:
                break
            streak += 1
        return streak

    def calculate_progress(
        self, db: Session, user_id: UUID, metric: ProgressMetric, now: datetime
    ) -> int:
        if metric == ProgressMetric.MOOD_COUNT:
            return crud_mood_entry.count_by_user(db, user_id=user_id)
        if metric == ProgressMetric.MOOD_STREAK:
            return self.calculate_mood_streak(db, user_id, to_utc_date(now))
        if metric == ProgressMetric.POSITIVE_MOODS_THIS_WEEK:
            return crud_mood_entry.count_by_user(
                db,
                user_id=user_id,
                moods=POSITIVE_MOODS,
                since=now - timedelta(days=self.positive_mood_window_days),
            )
        if metric == ProgressMetric.GAME_COUNT:
            return crud_game_result.count_by_user(db, user_id=user_id)
        if metric == ProgressMetric.JOURNAL_COUNT:
            return crud_journal_entry.count_by_user(db, user_id=user_id)
        if metric == ProgressMetric.ANALYSIS_COUNT:
            return crud_mood_analysis.count_by_user(db, user_id=user_id)
        logger.warning("Unknown progress metric %r", metric)
        return 0

    # =====================================================================
    # CHECK
    # =====================================================================

    def check_achievements(
        self, db: Session, user_id: UUID, now: Optional[datetime] = None
    ) -> List[Achievement]:
        """
        Unlock every catalog achievement the user has newly earned.

        Already-unlocked achievements are skipped, so a second call without
        new activity returns an empty list. Failures are logged: a read or
        write error for one achievement skips only that achievement.

        Args:
            db: Database session
            user_id: User UUID
            now: Reference time, defaults to the current UTC time

        Returns:
            Newly unlocked Achievement instances
        """
        now = now or datetime.now(timezone.utc)
        logger.info("Starting achievement check for user: %s", user_id)

        try:
            existing = {
                row.achievement_type: row
                for row in crud_achievement.get_by_user(db, user_id=user_id)
            }
        except DatabaseError:
            logger.error("Could not load achievements for user %s", user_id, exc_info=True)
            return []

        progress_by_metric: Dict[ProgressMetric, int] = {}
        unlocked: List[Achievement] = []

        for definition in ACHIEVEMENT_CATALOG:
            row = existing.get(definition.type)
            if row is not None and row.is_unlocked:
                continue

            try:
                if definition.metric not in progress_by_metric:
                    progress_by_metric[definition.metric] = self.calculate_progress(
                        db, user_id, definition.metric, now
                    )
                progress = progress_by_metric[definition.metric]
                logger.debug(
                    "Checking %s: progress=%d, target=%d",
                    definition.type, progress, definition.target,
                )

                if progress >= definition.target:
                    achievement = crud_achievement.upsert_unlocked(
                        db,
                        user_id=user_id,
                        definition=definition,
                        progress=progress,
                        unlocked_at=now,
                    )
                    unlocked.append(achievement)
                    logger.info("Unlocked achievement %s for user %s", definition.title, user_id)
            except DatabaseError:
                logger.error(
                    "Skipping achievement %s for user %s", definition.type, user_id,
                    exc_info=True,
                )

        logger.info("Total new achievements unlocked: %d", len(unlocked))
        return unlocked

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_user_achievements(self, db: Session, user_id: UUID) -> List[Achievement]:
        return crud_achievement.get_by_user(db, user_id=user_id)

    def get_achievement_progress(self, db: Session, user_id: UUID) -> Dict[str, int]:
        """Unlocked count against the size of the catalog."""
        achievements = self.get_user_achievements(db, user_id)
        return {
            "unlocked": sum(1 for a in achievements if a.is_unlocked),
            "total": len(ACHIEVEMENT_CATALOG),
        }


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

achievement_service = AchievementService(
    streak_lookback_days=settings.STREAK_LOOKBACK_DAYS,
    positive_mood_window_days=settings.POSITIVE_MOOD_WINDOW_DAYS,
)
