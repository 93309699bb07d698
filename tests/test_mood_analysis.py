import uuid
from datetime import timedelta

import pytest

from wellness.core.config import settings
from wellness.core.exceptions import ConfigurationError, DataFetchError, PersistenceError
from wellness.crud import mood_analysis as crud_mood_analysis_module
from wellness.crud import mood_entry as crud_mood_entry_module
from wellness.crud.mood_analysis import crud_mood_analysis
from wellness.models import MoodAnalysis, WellnessGoal
from wellness.services import insight_generator
from wellness.services.insight_generator import (
    FallbackInsightGenerator,
    LocalInsightGenerator,
    RemoteInsightGenerator,
    TREND_MESSAGES,
)
from wellness.services.mood_analysis import MoodAnalysisService, get_mood_analysis_service


def test_user_with_three_entries_is_analyzed(db, analysis_service, add_mood, add_journal, user_id, now):
    for i, mood in enumerate(["happy", "happy", "sad"]):
        add_mood(user_id, mood, now - timedelta(days=2 - i))
    add_journal(user_id, now - timedelta(hours=3))

    insights = analysis_service.run_daily_analysis(db, user_id=user_id, now=now)

    assert len(insights) == 1
    insight = insights[0]
    assert insight.user_id == user_id
    assert insight.mood_trend == 0
    assert insight.recent_avg_mood == pytest.approx(19 / 3)
    assert insight.total_entries == 4
    assert insight.ai_response == "You are doing well."
    assert insight.source == "remote"


def test_stored_analysis_round_trips(db, analysis_service, add_mood, user_id, now):
    for mood in ["excited", "neutral", "sad", "grateful"]:
        add_mood(user_id, mood, now - timedelta(hours=5))

    insight = analysis_service.run_daily_analysis(db, user_id=user_id, now=now)[0]

    rows = crud_mood_analysis.get_by_user(db, user_id=user_id)
    assert len(rows) == 1
    row = rows[0]
    assert row.mood_trend == insight.mood_trend
    assert row.recent_avg_mood == insight.recent_avg_mood
    assert row.total_mood_entries == 4
    assert row.total_journal_entries == 0
    assert row.raw_ai_response == insight.ai_response
    assert row.ai_insights["source"] == "remote"


def test_user_with_two_entries_is_excluded(db, analysis_service, add_mood, user_id, now):
    add_mood(user_id, "happy", now - timedelta(days=1))
    add_mood(user_id, "sad", now - timedelta(hours=1))

    insights = analysis_service.run_daily_analysis(db, user_id=user_id, now=now)

    assert insights == []
    assert db.query(MoodAnalysis).count() == 0


def test_entries_outside_window_are_ignored(db, analysis_service, add_mood, user_id, now):
    for days in (8, 9, 10):
        add_mood(user_id, "happy", now - timedelta(days=days))
    add_mood(user_id, "happy", now - timedelta(days=1))

    assert analysis_service.run_daily_analysis(db, user_id=user_id, now=now) == []


def test_batch_run_covers_every_eligible_user(db, analysis_service, add_mood, now):
    eligible = [uuid.uuid4(), uuid.uuid4()]
    for uid in eligible:
        for _ in range(3):
            add_mood(uid, "neutral", now - timedelta(hours=2))
    add_mood(uuid.uuid4(), "neutral", now - timedelta(hours=2))

    insights = analysis_service.run_daily_analysis(db, now=now)

    assert {i.user_id for i in insights} == set(eligible)
    assert db.query(MoodAnalysis).count() == 2


def test_rerun_appends_another_row(db, analysis_service, add_mood, user_id, now):
    for _ in range(3):
        add_mood(user_id, "tired", now - timedelta(hours=2))

    analysis_service.run_daily_analysis(db, user_id=user_id, now=now)
    analysis_service.run_daily_analysis(db, user_id=user_id, now=now + timedelta(minutes=1))

    assert crud_mood_analysis.count_by_user(db, user_id=user_id) == 2


def test_remote_failure_degrades_to_local(db, failing_analysis_service, add_mood, user_id, now):
    for mood in ["happy", "happy", "sad"]:
        add_mood(user_id, mood, now - timedelta(hours=1))

    insights = failing_analysis_service.run_daily_analysis(db, user_id=user_id, now=now)

    assert insights[0].source == "local"
    assert TREND_MESSAGES["stable"] in insights[0].ai_response
    row = crud_mood_analysis.get_by_user(db, user_id=user_id)[0]
    assert row.ai_insights["source"] == "local"
    assert row.ai_insights["trend_analysis"] == TREND_MESSAGES["stable"]


class StubResponse:
    status_code = 200
    ok = True
    text = ""

    def __init__(self, payload):
        self._payload = payload

    def json(self):
        return self._payload


def test_malformed_remote_reply_degrades_only_that_user(db, add_mood, monkeypatch, now):
    users = [uuid.uuid4(), uuid.uuid4()]
    for uid in users:
        for mood in ["happy", "grateful", "sad"]:
            add_mood(uid, mood, now - timedelta(hours=1))

    replies = [[{"generated_text": 42}], [{"generated_text": "Keep it up."}]]
    monkeypatch.setattr(
        insight_generator.requests, "post", lambda *args, **kwargs: StubResponse(replies.pop(0))
    )
    service = MoodAnalysisService(
        generator=FallbackInsightGenerator(
            remote=RemoteInsightGenerator(api_key="key", model_url="https://example.test/model"),
            local=LocalInsightGenerator(),
        )
    )

    insights = service.run_daily_analysis(db, now=now)

    assert {insight.user_id for insight in insights} == set(users)
    assert sorted(insight.source for insight in insights) == ["local", "remote"]
    assert db.query(MoodAnalysis).count() == 2


def test_fetch_failure_aborts_run(db, analysis_service, monkeypatch, user_id, now):
    def broken(*args, **kwargs):
        raise DataFetchError("store unavailable")

    monkeypatch.setattr(crud_mood_entry_module.crud_mood_entry, "get_since", broken)

    with pytest.raises(DataFetchError):
        analysis_service.run_daily_analysis(db, user_id=user_id, now=now)


def test_persistence_failure_surfaces(db, analysis_service, add_mood, monkeypatch, user_id, now):
    for _ in range(3):
        add_mood(user_id, "happy", now - timedelta(hours=1))

    def broken(*args, **kwargs):
        raise PersistenceError("insert failed")

    monkeypatch.setattr(crud_mood_analysis_module.crud_mood_analysis, "create", broken)

    with pytest.raises(PersistenceError):
        analysis_service.run_daily_analysis(db, user_id=user_id, now=now)


def test_analysis_advances_analysis_goals(db, analysis_service, add_mood, add_goal, user_id, now):
    for _ in range(3):
        add_mood(user_id, "happy", now - timedelta(hours=1))
    goal = add_goal(user_id, "Run a weekly Analysis", target_value=4)

    analysis_service.run_daily_analysis(db, user_id=user_id, now=now)

    db.refresh(goal)
    assert goal.current_value == 1


def test_missing_api_key_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "HUGGING_FACE_API_KEY", "")

    with pytest.raises(ConfigurationError) as exc_info:
        get_mood_analysis_service()

    assert exc_info.value.missing == ["HUGGING_FACE_API_KEY"]


def test_service_built_from_settings():
    service = get_mood_analysis_service()

    assert service.window_days == settings.ANALYSIS_WINDOW_DAYS
    assert service.min_mood_entries == 3


def test_only_api_key_is_required_credential(monkeypatch):
    monkeypatch.setattr(settings, "HUGGING_FACE_API_KEY", "key")

    assert settings.missing_analysis_credentials() == []
