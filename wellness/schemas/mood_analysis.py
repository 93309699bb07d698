# schemas/mood_analysis.py
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict


# =====================================================================
# PERSISTENCE
# =====================================================================

class MoodAnalysisCreate(BaseModel):
    """One analysis run for one user."""
    user_id: UUID
    analysis_date: datetime
    mood_trend: float
    recent_avg_mood: float
    earlier_avg_mood: float
    total_mood_entries: int
    total_journal_entries: int
    ai_insights: Dict[str, str]
    raw_ai_response: str


class MoodAnalysisRead(MoodAnalysisCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID


# =====================================================================
# API OUTPUT
# =====================================================================

class InsightSummary(BaseModel):
    """Normalized insight returned for immediate display."""
    user_id: UUID
    mood_trend: float
    recent_avg_mood: float
    total_entries: int
    ai_response: str
    analysis_date: datetime
    source: str = Field("remote", description="remote or local")


class MoodAnalysisResponse(BaseModel):
    success: bool
    insights: List[InsightSummary] = []
    message: Optional[str] = None
    local_analysis: Optional[bool] = None
    error: Optional[str] = None
    fallback: Optional[bool] = None
    timestamp: datetime
