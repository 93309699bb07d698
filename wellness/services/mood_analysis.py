# services/mood_analysis.py
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session

from wellness.core.config import settings
from wellness.core.exceptions import ConfigurationError, DatabaseError
from wellness.crud.journal_entry import crud_journal_entry
from wellness.crud.mood_analysis import crud_mood_analysis
from wellness.crud.mood_entry import crud_mood_entry
from wellness.schemas.mood_analysis import InsightSummary, MoodAnalysisCreate
from wellness.services.insight_generator import (
    FallbackInsightGenerator,
    LocalInsightGenerator,
    RemoteInsightGenerator,
)
from wellness.services.mood_trend import calculate_mood_trends, group_by_user, UserData
from wellness.services.wellness_goal import wellness_goal_service

logger = logging.getLogger(__name__)


class MoodAnalysisService:
    """
    Daily mood analysis: fetch the trailing window of entries, compute
    trends for every user with enough data, generate an insight and append
    one ai_mood_analysis row per user.
    """

    def __init__(
        self,
        generator: FallbackInsightGenerator,
        window_days: int = 7,
        trend_window_size: int = 7,
        min_mood_entries: int = 3,
    ):
        self.generator = generator
        self.window_days = window_days
        self.trend_window_size = trend_window_size
        self.min_mood_entries = min_mood_entries

    # =====================================================================
    # DATA COLLECTION
    # =====================================================================

    def collect_user_data(
        self, db: Session, *, since: datetime, user_id: Optional[UUID] = None
    ) -> List[UserData]:
        """
        Fetch mood and journal entries since `since` and group them per user.

        Raises:
            DataFetchError: If either read fails; the whole run is aborted
        """
        mood_entries = crud_mood_entry.get_since(db, since=since, user_id=user_id)
        journal_entries = crud_journal_entry.get_since(db, since=since, user_id=user_id)

        logger.info(
            "Found %d mood entries and %d journal entries",
            len(mood_entries), len(journal_entries),
        )
        return group_by_user(mood_entries, journal_entries, self.min_mood_entries)

    # =====================================================================
    # ANALYSIS RUN
    # =====================================================================

    def run_daily_analysis(
        self,
        db: Session,
        user_id: Optional[UUID] = None,
        now: Optional[datetime] = None,
    ) -> List[InsightSummary]:
        """
        Analyze one user, or every user when user_id is None.

        Args:
            db: Database session
            user_id: Restrict the run to this user
            now: Reference time, defaults to the current UTC time

        Returns:
            One InsightSummary per analyzed user

        Raises:
            DataFetchError: If fetching the batch fails
            PersistenceError: If an analysis row cannot be stored
        """
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=self.window_days)

        logger.info("Starting daily mood analysis (user=%s)", user_id or "all")
        user_data_list = self.collect_user_data(db, since=since, user_id=user_id)
        logger.info("Processing %d users with sufficient data", len(user_data_list))

        insights: List[InsightSummary] = []
        for user_data in user_data_list:
            insights.append(self._analyze_user(db, user_data, now))

        logger.info("Daily mood analysis completed: %d insights", len(insights))
        return insights

    def _analyze_user(self, db: Session, user_data: UserData, now: datetime) -> InsightSummary:
        logger.info("Analyzing user: %s", user_data.user_id)

        trends = calculate_mood_trends(user_data.mood_entries, self.trend_window_size)
        insight = self.generator.generate(user_data, trends)

        crud_mood_analysis.create(
            db,
            obj_in=MoodAnalysisCreate(
                user_id=user_data.user_id,
                analysis_date=now,
                mood_trend=trends.mood_trend,
                recent_avg_mood=trends.recent_avg,
                earlier_avg_mood=trends.earlier_avg,
                total_mood_entries=len(user_data.mood_entries),
                total_journal_entries=len(user_data.journal_entries),
                ai_insights={"source": insight.source, **insight.sections},
                raw_ai_response=insight.text,
            ),
        )

        try:
            wellness_goal_service.update_goal_progress_for_activity(
                db, user_id=user_data.user_id, activity_type="mood_analysis"
            )
        except DatabaseError:
            logger.error(
                "Goal update after analysis failed for user %s", user_data.user_id,
                exc_info=True,
            )

        return InsightSummary(
            user_id=user_data.user_id,
            mood_trend=trends.mood_trend,
            recent_avg_mood=trends.recent_avg,
            total_entries=len(user_data.mood_entries) + len(user_data.journal_entries),
            ai_response=insight.text,
            analysis_date=now,
            source=insight.source,
        )


# =====================================================================
# FACTORY
# =====================================================================

def get_mood_analysis_service() -> MoodAnalysisService:
    """
    Build the service from settings.

    Raises:
        ConfigurationError: If required credentials are missing
    """
    missing = settings.missing_analysis_credentials()
    if missing:
        raise ConfigurationError(missing)

    return MoodAnalysisService(
        generator=FallbackInsightGenerator(
            remote=RemoteInsightGenerator.from_settings(),
            local=LocalInsightGenerator(),
        ),
        window_days=settings.ANALYSIS_WINDOW_DAYS,
        trend_window_size=settings.TREND_WINDOW_SIZE,
        min_mood_entries=settings.MIN_MOOD_ENTRIES,
    )
