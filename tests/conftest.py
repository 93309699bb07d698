import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["HUGGING_FACE_API_KEY"] = "test-key"

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wellness.core.config import Base, get_db
from wellness.core.exceptions import RemoteGenerationError
from wellness.models import GameResult, JournalEntry, MoodAnalysis, MoodEntry, WellnessGoal
from wellness.services.insight_generator import (
    FallbackInsightGenerator,
    InsightGenerator,
    LocalInsightGenerator,
)
from wellness.services.mood_analysis import MoodAnalysisService


# =====================================================================
# DATABASE
# =====================================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


# =====================================================================
# RECORD FACTORIES
# =====================================================================

@pytest.fixture
def add_mood(db):
    def _add(user_id, mood, created_at=None):
        entry = MoodEntry(
            user_id=user_id,
            mood=mood,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(entry)
        db.commit()
        return entry
    return _add


@pytest.fixture
def add_journal(db):
    def _add(user_id, created_at=None, title="Today", content="Some thoughts"):
        entry = JournalEntry(
            user_id=user_id,
            title=title,
            content=content,
            tags=[],
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(entry)
        db.commit()
        return entry
    return _add


@pytest.fixture
def add_game(db):
    def _add(user_id, game_type="breathing"):
        result = GameResult(user_id=user_id, game_type=game_type, duration_seconds=60)
        db.add(result)
        db.commit()
        return result
    return _add


@pytest.fixture
def add_goal(db):
    def _add(user_id, title, goal_type="custom", target_value=3, current_value=0):
        goal = WellnessGoal(
            user_id=user_id,
            title=title,
            description="",
            goal_type=goal_type,
            target_value=target_value,
            current_value=current_value,
            unit="times",
        )
        db.add(goal)
        db.commit()
        return goal
    return _add


@pytest.fixture
def add_analysis(db):
    def _add(user_id):
        row = MoodAnalysis(
            user_id=user_id,
            mood_trend=0.0,
            recent_avg_mood=5.0,
            earlier_avg_mood=0.0,
            total_mood_entries=3,
            total_journal_entries=0,
            ai_insights={"source": "local"},
            raw_ai_response="text",
        )
        db.add(row)
        db.commit()
        return row
    return _add


# =====================================================================
# INSIGHT GENERATION STUBS
# =====================================================================

class StaticRemote(InsightGenerator):
    def __init__(self, text="You are doing well."):
        self.text = text
        self.calls = 0

    def generate(self, user_data, trends):
        self.calls += 1
        return self.text


class UnavailableRemote(InsightGenerator):
    def generate(self, user_data, trends):
        raise RemoteGenerationError("Text generation error: 503", status_code=503, body="unavailable")


@pytest.fixture
def remote_ok():
    return StaticRemote()


@pytest.fixture
def analysis_service(remote_ok):
    return MoodAnalysisService(
        generator=FallbackInsightGenerator(remote=remote_ok, local=LocalInsightGenerator())
    )


@pytest.fixture
def failing_analysis_service():
    return MoodAnalysisService(
        generator=FallbackInsightGenerator(remote=UnavailableRemote(), local=LocalInsightGenerator())
    )


# =====================================================================
# API CLIENT
# =====================================================================

@pytest.fixture
def client(db):
    from main import app

    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
