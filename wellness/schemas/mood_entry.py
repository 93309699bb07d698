# schemas/mood_entry.py
from enum import Enum
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from wellness.schemas.achievement import AchievementRead


class MoodLabel(str, Enum):
    """The eight check-in moods a user can log."""
    happy = "happy"
    excited = "excited"
    grateful = "grateful"
    neutral = "neutral"
    tired = "tired"
    anxious = "anxious"
    angry = "angry"
    sad = "sad"


class MoodEntryCreate(BaseModel):
    user_id: UUID
    mood: MoodLabel
    intensity: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = None


class MoodEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    mood: MoodLabel
    intensity: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime


class MoodEntryRecorded(BaseModel):
    """Saved mood entry plus any achievements it unlocked."""
    entry: MoodEntryRead
    new_achievements: List[AchievementRead] = []
