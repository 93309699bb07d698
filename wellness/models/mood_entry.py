# models/mood_entry.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Text, DateTime, Uuid
from wellness.core.config import Base


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    mood = Column(String(32), nullable=False)  # one of MoodLabel
    intensity = Column(Integer, nullable=True)  # 1-10
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
