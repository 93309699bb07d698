# wellness/models/__init__.py

from wellness.core.config import Base

# Import all models here so metadata.create_all sees every table
from .mood_entry import MoodEntry
from .journal_entry import JournalEntry
from .game_result import GameResult
from .achievement import Achievement
from .wellness_goal import WellnessGoal, GoalType
from .mood_analysis import MoodAnalysis

__all__ = [
    "Base",
    "MoodEntry",
    "JournalEntry",
    "GameResult",
    "Achievement",
    "WellnessGoal",
    "GoalType",
    "MoodAnalysis",
]
