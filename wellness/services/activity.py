# services/activity.py
import logging
from typing import List, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from wellness.core.exceptions import DatabaseError, NotFoundError
from wellness.crud.game_result import crud_game_result
from wellness.crud.journal_entry import crud_journal_entry
from wellness.crud.mood_entry import crud_mood_entry
from wellness.models.achievement import Achievement
from wellness.models.game_result import GameResult
from wellness.models.journal_entry import JournalEntry
from wellness.models.mood_entry import MoodEntry
from wellness.schemas.game_result import GameResultCreate
from wellness.schemas.journal_entry import JournalEntryCreate, JournalEntryUpdate
from wellness.schemas.mood_entry import MoodEntryCreate
from wellness.services.achievement import achievement_service
from wellness.services.wellness_goal import wellness_goal_service

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Records user activity (mood check-ins, journal entries, game sessions)
    and then advances goals and achievements. Post-processing failures are
    logged and never fail the recorded activity.
    """

    def _after_activity(self, db: Session, user_id: UUID, activity_type: str) -> List[Achievement]:
        try:
            wellness_goal_service.update_goal_progress_for_activity(
                db, user_id=user_id, activity_type=activity_type
            )
        except DatabaseError:
            logger.error("Goal update failed after %s for user %s", activity_type, user_id, exc_info=True)

        return achievement_service.check_achievements(db, user_id)

    # ====================================================
    # MOOD
    # ====================================================

    def record_mood(self, db: Session, entry_in: MoodEntryCreate) -> Tuple[MoodEntry, List[Achievement]]:
        entry = crud_mood_entry.create(db, obj_in=entry_in)
        return entry, self._after_activity(db, entry.user_id, "mood_entry")

    def get_mood_history(self, db: Session, user_id: UUID, skip: int = 0, limit: int = 100) -> List[MoodEntry]:
        return crud_mood_entry.get_by_user(db, user_id=user_id, skip=skip, limit=limit)

    # ====================================================
    # JOURNAL
    # ====================================================

    def record_journal(
        self, db: Session, entry_in: JournalEntryCreate
    ) -> Tuple[JournalEntry, List[Achievement]]:
        entry = crud_journal_entry.create(db, obj_in=entry_in)
        return entry, self._after_activity(db, entry.user_id, "journal_entry")

    def update_journal(self, db: Session, entry_id: UUID, update_in: JournalEntryUpdate) -> JournalEntry:
        entry = crud_journal_entry.get(db, entry_id)
        if not entry:
            raise NotFoundError("Journal entry not found")
        return crud_journal_entry.update(db, db_obj=entry, obj_in=update_in)

    def delete_journal(self, db: Session, entry_id: UUID) -> JournalEntry:
        entry = crud_journal_entry.get(db, entry_id)
        if not entry:
            raise NotFoundError("Journal entry not found")
        return crud_journal_entry.delete(db, db_obj=entry)

    # ====================================================
    # GAMES
    # ====================================================

    def record_game(self, db: Session, result_in: GameResultCreate) -> Tuple[GameResult, List[Achievement]]:
        result = crud_game_result.create(db, obj_in=result_in)
        return result, self._after_activity(db, result.user_id, "game_played")


activity_service = ActivityService()
