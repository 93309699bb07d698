import uuid

import pytest
import requests

from wellness.core.exceptions import RemoteGenerationError
from wellness.models import MoodEntry
from wellness.services import insight_generator
from wellness.services.insight_generator import (
    FallbackInsightGenerator,
    LocalInsightGenerator,
    RemoteInsightGenerator,
    TREND_MESSAGES,
    build_prompt,
    recommendation_tier,
    trend_bucket,
)
from wellness.services.mood_trend import MoodTrends, UserData, calculate_mood_trends


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def user_data():
    user_id = uuid.uuid4()
    labels = ["sad", "happy", "happy"]
    return UserData(
        user_id=user_id,
        mood_entries=[MoodEntry(user_id=user_id, mood=label) for label in labels],
    )


@pytest.fixture
def remote():
    return RemoteInsightGenerator(api_key="key", model_url="https://example.test/model", timeout=5)


def patch_post(monkeypatch, response=None, exc=None):
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(insight_generator.requests, "post", fake_post)
    return calls


# =====================================================================
# BUCKETS
# =====================================================================

@pytest.mark.parametrize("trend, bucket", [
    (1.5, "improving_strongly"),
    (1.0, "improving"),
    (0.1, "improving"),
    (0.0, "stable"),
    (-0.5, "declining"),
    (-1.0, "declining"),
    (-1.01, "declining_strongly"),
])
def test_trend_bucket(trend, bucket):
    assert trend_bucket(trend) == bucket


@pytest.mark.parametrize("avg, tier", [(0, "low"), (4.9, "low"), (5, "mid"), (6.9, "mid"), (7, "high"), (10, "high")])
def test_recommendation_tier(avg, tier):
    assert recommendation_tier(avg) == tier


# =====================================================================
# LOCAL STRATEGY
# =====================================================================

def test_local_analysis_sections_in_fixed_order(user_data):
    trends = calculate_mood_trends(user_data.mood_entries)

    text = LocalInsightGenerator().generate(user_data, trends)

    assert text.startswith(TREND_MESSAGES["stable"])
    assert text.index("Mood Patterns") < text.index("Personalized Recommendations") < text.index("Suggested Activities")


def test_local_analysis_mood_patterns(user_data):
    trends = calculate_mood_trends(user_data.mood_entries)

    sections = LocalInsightGenerator().build_sections(user_data, trends)

    assert 'most frequent mood is "happy" (67% of entries)' in sections["patterns"]
    assert "Recent mood pattern: happy, happy, sad" in sections["patterns"]


def test_local_analysis_limits_recent_pattern_to_three(user_data):
    user_data.mood_entries.append(MoodEntry(user_id=user_data.user_id, mood="tired"))
    trends = calculate_mood_trends(user_data.mood_entries)

    sections = LocalInsightGenerator().build_sections(user_data, trends)

    assert "Recent mood pattern: tired, happy, happy\n" in sections["patterns"]


def test_local_analysis_recommendation_tier(user_data):
    low = LocalInsightGenerator().generate(user_data, MoodTrends(-2.0, 3.0, 5.0))
    high = LocalInsightGenerator().generate(user_data, MoodTrends(2.0, 8.5, 6.5))

    assert "Practice deep breathing exercises" in low
    assert TREND_MESSAGES["declining_strongly"] in low
    assert "Share your positive energy with others" in high
    assert TREND_MESSAGES["improving_strongly"] in high


def test_local_analysis_without_mood_entries():
    user_data = UserData(user_id=uuid.uuid4())

    text = LocalInsightGenerator().generate(user_data, MoodTrends(0.0, 0.0, 0.0))

    assert "Mood Patterns" not in text
    assert "Suggested Activities" in text


# =====================================================================
# REMOTE STRATEGY
# =====================================================================

def test_prompt_describes_trend_and_counts(user_data):
    prompt = build_prompt(user_data, MoodTrends(1.2, 7.25, 6.05))

    assert "Mood Trend: Improving" in prompt
    assert "Recent Average Mood: 7.2/10" in prompt
    assert "3 mood entries, 0 journal entries" in prompt


def test_remote_sends_generation_parameters(monkeypatch, remote, user_data):
    calls = patch_post(monkeypatch, FakeResponse(payload=[{"generated_text": " Keep going. "}]))

    text = remote.generate(user_data, MoodTrends(0.0, 6.3, 0.0))

    assert text == "Keep going."
    assert calls[0]["url"] == "https://example.test/model"
    assert calls[0]["headers"]["Authorization"] == "Bearer key"
    assert calls[0]["timeout"] == 5
    assert calls[0]["json"]["parameters"] == {
        "max_length": 150,
        "temperature": 0.7,
        "do_sample": True,
        "return_full_text": False,
    }


def test_remote_accepts_single_object_response(monkeypatch, remote, user_data):
    patch_post(monkeypatch, FakeResponse(payload={"generated_text": "Nice work."}))

    assert remote.generate(user_data, MoodTrends(0.0, 6.3, 0.0)) == "Nice work."


def test_remote_http_error_carries_status_and_body(monkeypatch, remote, user_data):
    patch_post(monkeypatch, FakeResponse(status_code=503, text="Model is loading"))

    with pytest.raises(RemoteGenerationError) as exc_info:
        remote.generate(user_data, MoodTrends(0.0, 6.3, 0.0))

    assert exc_info.value.status_code == 503
    assert exc_info.value.body == "Model is loading"


def test_remote_timeout_is_a_generation_error(monkeypatch, remote, user_data):
    patch_post(monkeypatch, exc=requests.Timeout("read timed out"))

    with pytest.raises(RemoteGenerationError) as exc_info:
        remote.generate(user_data, MoodTrends(0.0, 6.3, 0.0))

    assert exc_info.value.status_code is None


@pytest.mark.parametrize("response", [
    FakeResponse(payload=None, text="<html>"),
    FakeResponse(payload=[]),
    FakeResponse(payload={"error": "nope"}),
    FakeResponse(payload=[{"generated_text": ""}]),
    FakeResponse(payload=[{"generated_text": "  \n "}]),
    FakeResponse(payload=[{"generated_text": 42}]),
    FakeResponse(payload={"generated_text": ["x"]}),
])
def test_remote_malformed_response(monkeypatch, remote, user_data, response):
    patch_post(monkeypatch, response)

    with pytest.raises(RemoteGenerationError):
        remote.generate(user_data, MoodTrends(0.0, 6.3, 0.0))


# =====================================================================
# FALLBACK
# =====================================================================

def test_fallback_uses_local_analysis_on_503(monkeypatch, remote, user_data):
    patch_post(monkeypatch, FakeResponse(status_code=503, text="unavailable"))
    generator = FallbackInsightGenerator(remote=remote, local=LocalInsightGenerator())
    trends = calculate_mood_trends(user_data.mood_entries)

    insight = generator.generate(user_data, trends)

    assert insight.is_local
    assert insight.text
    assert TREND_MESSAGES[trend_bucket(trends.mood_trend)] in insight.text
    assert insight.sections["trend_analysis"] == TREND_MESSAGES["stable"]


@pytest.mark.parametrize("payload", [
    [{"generated_text": 42}],
    {"generated_text": ["x"]},
    [{"generated_text": "   \n "}],
])
def test_fallback_uses_local_analysis_on_unusable_text(monkeypatch, remote, user_data, payload):
    patch_post(monkeypatch, FakeResponse(payload=payload))
    generator = FallbackInsightGenerator(remote=remote, local=LocalInsightGenerator())

    insight = generator.generate(user_data, calculate_mood_trends(user_data.mood_entries))

    assert insight.is_local
    assert insight.text.strip()


def test_fallback_keeps_remote_text(monkeypatch, remote, user_data):
    patch_post(monkeypatch, FakeResponse(payload=[{"generated_text": "Remote says hi"}]))
    generator = FallbackInsightGenerator(remote=remote, local=LocalInsightGenerator())

    insight = generator.generate(user_data, MoodTrends(0.0, 6.3, 0.0))

    assert not insight.is_local
    assert insight.source == "remote"
    assert insight.text == "Remote says hi"
