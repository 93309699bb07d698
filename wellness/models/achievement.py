# models/achievement.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, UniqueConstraint, Uuid
)
from wellness.core.config import Base


class Achievement(Base):
    __tablename__ = "achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_type", name="uq_achievement_user_type"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    achievement_type = Column(String(64), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(String(255), nullable=False)
    icon = Column(String(16), nullable=False)

    progress = Column(Integer, nullable=False, default=0)
    target = Column(Integer, nullable=False)
    is_unlocked = Column(Boolean, nullable=False, default=False)
    unlocked_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
