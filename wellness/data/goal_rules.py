# wellness/data/goal_rules.py
"""
Activity to goal matching rules.

A goal matches an activity when its goal_type is one of the rule's
categories or its title contains the rule's keyword (case-insensitive).
This is a heuristic over user-authored titles: a goal titled "Journal
about my mood" matches both journal and mood activities.
"""
from typing import FrozenSet, List, NamedTuple


class GoalRule(NamedTuple):
    activity_type: str
    goal_types: FrozenSet[str]
    title_keyword: str


GOAL_RULES: List[GoalRule] = [
    GoalRule("mood_entry", frozenset({"mood"}), "mood"),
    GoalRule("game_played", frozenset({"activity"}), "game"),
    GoalRule("journal_entry", frozenset({"activity"}), "journal"),
    GoalRule("mood_analysis", frozenset({"activity"}), "analysis"),
]
