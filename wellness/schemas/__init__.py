# wellness/schemas/__init__.py

from .achievement import (
    AchievementRead,
    AchievementCheckRequest,
    AchievementCheckResponse,
    AchievementProgress,
)
from .mood_entry import (
    MoodLabel,
    MoodEntryCreate,
    MoodEntryRead,
    MoodEntryRecorded,
)
from .journal_entry import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryRead,
    JournalEntryRecorded,
)
from .game_result import (
    GameResultCreate,
    GameResultRead,
    GameResultRecorded,
)
from .wellness_goal import (
    WellnessGoalCreate,
    WellnessGoalRead,
    GoalProgressUpdate,
)
from .mood_analysis import (
    MoodAnalysisCreate,
    MoodAnalysisRead,
    InsightSummary,
    MoodAnalysisResponse,
)


__all__ = [
    # Achievements
    "AchievementRead", "AchievementCheckRequest", "AchievementCheckResponse",
    "AchievementProgress",

    # Activities
    "MoodLabel", "MoodEntryCreate", "MoodEntryRead", "MoodEntryRecorded",
    "JournalEntryCreate", "JournalEntryUpdate", "JournalEntryRead", "JournalEntryRecorded",
    "GameResultCreate", "GameResultRead", "GameResultRecorded",

    # Goals
    "WellnessGoalCreate", "WellnessGoalRead", "GoalProgressUpdate",

    # Analysis
    "MoodAnalysisCreate", "MoodAnalysisRead", "InsightSummary", "MoodAnalysisResponse",
]
