# models/game_result.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Uuid
from wellness.core.config import Base


class GameResult(Base):
    """Write-once record of a completed mini-game session."""

    __tablename__ = "game_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    game_type = Column(String(64), nullable=False)
    duration_seconds = Column(Integer, nullable=False, default=0)
    score = Column(Integer, nullable=True)
    drift_count = Column(Integer, nullable=True)  # candle focus
    breath_count = Column(Integer, nullable=True)  # breathing games

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
