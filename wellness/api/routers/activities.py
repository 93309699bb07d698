# wellness/api/routers/activities.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness.core.config import get_db
from wellness.schemas.game_result import GameResultCreate, GameResultRecorded
from wellness.schemas.journal_entry import (
    JournalEntryCreate,
    JournalEntryRead,
    JournalEntryRecorded,
    JournalEntryUpdate,
)
from wellness.schemas.mood_entry import MoodEntryCreate, MoodEntryRead, MoodEntryRecorded
from wellness.services.activity import activity_service

router = APIRouter(tags=["Activities"])


# ====================================================
# MOOD ENDPOINTS
# ====================================================


@router.post("/moods", response_model=MoodEntryRecorded, status_code=status.HTTP_201_CREATED)
def submit_mood(entry_in: MoodEntryCreate, db: Session = Depends(get_db)):
    """Record a mood check-in and return any achievements it unlocked."""
    entry, new_achievements = activity_service.record_mood(db, entry_in)
    return {"entry": entry, "new_achievements": new_achievements}


@router.get("/moods/{user_id}", response_model=List[MoodEntryRead])
def get_mood_history(
    user_id: UUID,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """Get a user's mood entries, newest first."""
    return activity_service.get_mood_history(db, user_id, skip=skip, limit=limit)


# ====================================================
# JOURNAL ENDPOINTS
# ====================================================


@router.post("/journals", response_model=JournalEntryRecorded, status_code=status.HTTP_201_CREATED)
def save_journal_entry(entry_in: JournalEntryCreate, db: Session = Depends(get_db)):
    entry, new_achievements = activity_service.record_journal(db, entry_in)
    return {"entry": entry, "new_achievements": new_achievements}


@router.put("/journals/{entry_id}", response_model=JournalEntryRead)
def update_journal_entry(
    entry_id: UUID,
    update_in: JournalEntryUpdate,
    db: Session = Depends(get_db),
):
    return activity_service.update_journal(db, entry_id, update_in)


@router.delete("/journals/{entry_id}")
def delete_journal_entry(entry_id: UUID, db: Session = Depends(get_db)):
    activity_service.delete_journal(db, entry_id)
    return {"message": "Journal entry deleted successfully"}


# ====================================================
# GAME ENDPOINTS
# ====================================================


@router.post("/games", response_model=GameResultRecorded, status_code=status.HTTP_201_CREATED)
def record_game_result(result_in: GameResultCreate, db: Session = Depends(get_db)):
    """Record a completed mindfulness game session."""
    result, new_achievements = activity_service.record_game(db, result_in)
    return {"result": result, "new_achievements": new_achievements}
