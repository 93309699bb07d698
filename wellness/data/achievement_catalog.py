# wellness/data/achievement_catalog.py
from enum import Enum
from typing import Dict, List, NamedTuple


# =====================================================================
# ENUMS
# =====================================================================

class ProgressMetric(str, Enum):
    """What an achievement's progress counter measures."""
    MOOD_COUNT = "mood_count"
    MOOD_STREAK = "mood_streak"
    POSITIVE_MOODS_THIS_WEEK = "positive_moods_this_week"
    GAME_COUNT = "game_count"
    JOURNAL_COUNT = "journal_count"
    ANALYSIS_COUNT = "analysis_count"


class AchievementDefinition(NamedTuple):
    type: str
    title: str
    description: str
    icon: str
    target: int
    metric: ProgressMetric


# =====================================================================
# ACHIEVEMENT CATALOG
# =====================================================================

ACHIEVEMENT_CATALOG: List[AchievementDefinition] = [
    # MOOD TRACKING
    AchievementDefinition("first_mood", "First Step", "Recorded your first mood entry", "🎯", 1, ProgressMetric.MOOD_COUNT),
    AchievementDefinition("mood_streak_3", "Consistent Tracker", "Tracked mood for 3 consecutive days", "🔥", 3, ProgressMetric.MOOD_STREAK),
    AchievementDefinition("mood_streak_7", "Week Warrior", "Tracked mood for 7 consecutive days", "⭐", 7, ProgressMetric.MOOD_STREAK),
    AchievementDefinition("mood_streak_30", "Monthly Master", "Tracked mood for 30 consecutive days", "👑", 30, ProgressMetric.MOOD_STREAK),
    AchievementDefinition("positive_mood", "Sunshine Seeker", "Recorded 5 positive moods in a week", "☀️", 5, ProgressMetric.POSITIVE_MOODS_THIS_WEEK),

    # MINDFULNESS GAMES
    AchievementDefinition("game_player", "Mindful Gamer", "Played your first mindfulness game", "🎮", 1, ProgressMetric.GAME_COUNT),
    AchievementDefinition("game_master", "Zen Master", "Completed 10 mindfulness games", "🧘", 10, ProgressMetric.GAME_COUNT),

    # JOURNALING
    AchievementDefinition("journal_writer", "Thoughtful Writer", "Wrote your first journal entry", "📝", 1, ProgressMetric.JOURNAL_COUNT),
    AchievementDefinition("journal_master", "Reflection Expert", "Wrote 10 journal entries", "📚", 10, ProgressMetric.JOURNAL_COUNT),

    # ANALYSIS
    AchievementDefinition("analysis_user", "Self-Aware", "Completed your first mood analysis", "🧠", 1, ProgressMetric.ANALYSIS_COUNT),
]

ACHIEVEMENTS_BY_TYPE: Dict[str, AchievementDefinition] = {
    definition.type: definition for definition in ACHIEVEMENT_CATALOG
}

# Moods counted towards the positive-mood achievement
POSITIVE_MOODS = ("happy", "excited", "grateful")
