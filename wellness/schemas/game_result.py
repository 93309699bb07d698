# schemas/game_result.py
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from wellness.schemas.achievement import AchievementRead


class GameResultCreate(BaseModel):
    user_id: UUID
    game_type: str = Field(..., min_length=1, max_length=64)
    duration_seconds: int = Field(..., ge=0)
    score: Optional[int] = None
    drift_count: Optional[int] = Field(None, ge=0)
    breath_count: Optional[int] = Field(None, ge=0)


class GameResultRead(GameResultCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class GameResultRecorded(BaseModel):
    result: GameResultRead
    new_achievements: List[AchievementRead] = []
