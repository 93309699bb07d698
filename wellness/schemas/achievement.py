# schemas/achievement.py
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class AchievementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    achievement_type: str
    title: str
    description: str
    icon: str
    progress: int
    target: int
    is_unlocked: bool
    unlocked_at: Optional[datetime] = None


class AchievementCheckRequest(BaseModel):
    userId: Optional[UUID] = None


class AchievementCheckResponse(BaseModel):
    success: bool
    newAchievements: List[AchievementRead]
    count: int


class AchievementProgress(BaseModel):
    unlocked: int
    total: int
