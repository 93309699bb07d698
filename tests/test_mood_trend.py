import math
import uuid

import pytest

from wellness.models import JournalEntry, MoodEntry
from wellness.services.mood_trend import (
    DEFAULT_MOOD_SCORE,
    calculate_mood_trends,
    group_by_user,
    mood_score,
)


def moods(*labels, user_id=None):
    user_id = user_id or uuid.uuid4()
    return [MoodEntry(user_id=user_id, mood=label) for label in labels]


def test_no_entries_gives_zero_trend():
    trends = calculate_mood_trends([])

    assert trends.mood_trend == 0
    assert trends.recent_avg == 0
    assert trends.earlier_avg == 0
    assert trends.direction == "Stable"


def test_single_entry_gives_zero_trend():
    trends = calculate_mood_trends(moods("happy"))

    assert trends.mood_trend == 0
    assert trends.recent_avg == 9


def test_trend_is_zero_while_earlier_window_is_empty():
    trends = calculate_mood_trends(moods("happy", "happy", "sad"))

    assert trends.mood_trend == 0
    assert trends.recent_avg == pytest.approx(19 / 3)
    assert trends.earlier_avg == 0


def test_recent_window_is_the_newest_entries():
    entries = moods(*(["sad"] * 7 + ["happy"] * 7))

    trends = calculate_mood_trends(entries)

    assert trends.recent_avg == 9
    assert trends.earlier_avg == 1
    assert trends.mood_trend == 8
    assert trends.direction == "Improving"


def test_partial_earlier_window():
    entries = moods("excited", "excited", *(["anxious"] * 7))

    trends = calculate_mood_trends(entries)

    assert trends.earlier_avg == 10
    assert trends.recent_avg == 3
    assert trends.mood_trend == -7
    assert trends.direction == "Declining"


def test_window_size_is_configurable():
    trends = calculate_mood_trends(moods("sad", "sad", "happy", "happy"), window_size=2)

    assert trends.mood_trend == 8


def test_window_size_must_be_positive():
    with pytest.raises(ValueError):
        calculate_mood_trends(moods("happy"), window_size=0)


@pytest.mark.parametrize("labels", [
    [],
    ["happy"],
    ["calm", "content", "stressed"],
    ["sad"] * 20,
    ["angry", "grateful"] * 9,
])
def test_trend_is_always_finite(labels):
    trends = calculate_mood_trends(moods(*labels))

    assert math.isfinite(trends.mood_trend)
    assert math.isfinite(trends.recent_avg)
    assert math.isfinite(trends.earlier_avg)


def test_unknown_labels_score_neutral():
    assert mood_score("calm") == DEFAULT_MOOD_SCORE
    assert mood_score("excited") == 10
    assert mood_score("sad") == 1


def test_group_by_user_drops_users_below_threshold():
    kept, dropped = uuid.uuid4(), uuid.uuid4()
    mood_entries = moods("happy", "sad", "neutral", user_id=kept) + moods("happy", "sad", user_id=dropped)
    journal_entries = [
        JournalEntry(user_id=kept, title="a", content="b"),
        JournalEntry(user_id=dropped, title="a", content="b"),
    ]

    users = group_by_user(mood_entries, journal_entries, min_mood_entries=3)

    assert [u.user_id for u in users] == [kept]
    assert len(users[0].mood_entries) == 3
    assert len(users[0].journal_entries) == 1


def test_group_by_user_ignores_journal_only_users():
    journal_only = uuid.uuid4()
    journal_entries = [JournalEntry(user_id=journal_only, title="a", content="b") for _ in range(5)]

    assert group_by_user([], journal_entries) == []
