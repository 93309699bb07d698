# schemas/journal_entry.py
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from wellness.schemas.achievement import AchievementRead


class JournalEntryBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    mood: Optional[str] = Field(None, max_length=32)
    tags: List[str] = []


class JournalEntryCreate(JournalEntryBase):
    user_id: UUID


class JournalEntryUpdate(BaseModel):
    """All fields optional; only provided fields are written."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    mood: Optional[str] = Field(None, max_length=32)
    tags: Optional[List[str]] = None


class JournalEntryRead(JournalEntryBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class JournalEntryRecorded(BaseModel):
    entry: JournalEntryRead
    new_achievements: List[AchievementRead] = []
