# models/mood_analysis.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Float, Text, DateTime, JSON, Uuid
from wellness.core.config import Base


class MoodAnalysis(Base):
    """Append-only log, one row per analysis run per user."""

    __tablename__ = "ai_mood_analysis"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    analysis_date = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    # ---- Trend ----
    mood_trend = Column(Float, nullable=False)
    recent_avg_mood = Column(Float, nullable=False)
    earlier_avg_mood = Column(Float, nullable=False)

    # ---- Volume ----
    total_mood_entries = Column(Integer, nullable=False)
    total_journal_entries = Column(Integer, nullable=False)

    # ---- Generated text ----
    ai_insights = Column(JSON, nullable=False)  # {"source": "remote"|"local", sections...}
    raw_ai_response = Column(Text, nullable=False)
