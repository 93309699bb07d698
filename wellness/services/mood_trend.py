# services/mood_trend.py
"""Mood scoring and recent-vs-earlier trend calculation."""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence
from uuid import UUID

from wellness.models.journal_entry import JournalEntry
from wellness.models.mood_entry import MoodEntry


# Canonical 0-10 score per check-in label.
MOOD_SCORES: Dict[str, int] = {
    "excited": 10,
    "happy": 9,
    "grateful": 8,
    "neutral": 5,
    "tired": 4,
    "anxious": 3,
    "angry": 2,
    "sad": 1,
}
DEFAULT_MOOD_SCORE = 5


@dataclass
class UserData:
    """One user's entries within the analysis window, oldest first."""
    user_id: UUID
    mood_entries: List[MoodEntry] = field(default_factory=list)
    journal_entries: List[JournalEntry] = field(default_factory=list)


@dataclass(frozen=True)
class MoodTrends:
    mood_trend: float
    recent_avg: float
    earlier_avg: float

    @property
    def direction(self) -> str:
        if self.mood_trend > 0:
            return "Improving"
        if self.mood_trend < 0:
            return "Declining"
        return "Stable"


def mood_score(label: str) -> int:
    return MOOD_SCORES.get(label, DEFAULT_MOOD_SCORE)


def _average(entries: Sequence[MoodEntry]) -> float:
    if not entries:
        return 0.0
    return sum(mood_score(entry.mood) for entry in entries) / len(entries)


def calculate_mood_trends(mood_entries: Sequence[MoodEntry], window_size: int = 7) -> MoodTrends:
    """
    Compare the mean score of the last `window_size` entries with the
    `window_size` entries before them.

    Entries must be ordered oldest first. The trend is 0 whenever either
    sub-window is empty; an empty sub-window averages 0.
    """
    if window_size < 1:
        raise ValueError("window_size must be at least 1")

    recent = list(mood_entries[-window_size:])
    earlier = list(mood_entries[-2 * window_size:-window_size])

    recent_avg = _average(recent)
    earlier_avg = _average(earlier)
    trend = recent_avg - earlier_avg if recent and earlier else 0.0

    return MoodTrends(mood_trend=trend, recent_avg=recent_avg, earlier_avg=earlier_avg)


def group_by_user(
    mood_entries: Sequence[MoodEntry],
    journal_entries: Sequence[JournalEntry],
    min_mood_entries: int = 3,
) -> List[UserData]:
    """
    Group entries per user and drop users with fewer than
    `min_mood_entries` mood entries.
    """
    users: Dict[UUID, UserData] = {}

    for entry in mood_entries:
        users.setdefault(entry.user_id, UserData(user_id=entry.user_id)).mood_entries.append(entry)

    for entry in journal_entries:
        users.setdefault(entry.user_id, UserData(user_id=entry.user_id)).journal_entries.append(entry)

    return [
        user_data for user_data in users.values()
        if len(user_data.mood_entries) >= min_mood_entries
    ]
