# schemas/wellness_goal.py
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from wellness.models.wellness_goal import GoalType


class WellnessGoalBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    goal_type: GoalType = GoalType.custom
    target_value: float = Field(..., gt=0)
    unit: str = Field("", max_length=50)
    deadline: Optional[datetime] = None


class WellnessGoalCreate(WellnessGoalBase):
    user_id: UUID
    current_value: float = Field(0, ge=0)


class WellnessGoalRead(WellnessGoalBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    current_value: float
    is_completed: bool
    created_at: datetime
    completed_at: Optional[datetime] = None


class GoalProgressUpdate(BaseModel):
    current_value: float = Field(..., ge=0)
