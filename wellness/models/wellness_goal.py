# models/wellness_goal.py

import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Text, Float, Boolean, DateTime, Enum, Uuid
)
from wellness.core.config import Base


class GoalType(str, enum.Enum):
    mood = "mood"
    activity = "activity"
    streak = "streak"
    custom = "custom"


class WellnessGoal(Base):
    __tablename__ = "wellness_goals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    goal_type = Column(Enum(GoalType), nullable=False, default=GoalType.custom)

    target_value = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False, default=0)
    unit = Column(String(50), nullable=False, default="")
    deadline = Column(DateTime, nullable=True)

    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    completed_at = Column(DateTime, nullable=True)
