# services/wellness_goal.py
import logging
from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session

from wellness.core.exceptions import NotFoundError, PersistenceError, ValidationError
from wellness.crud.wellness_goal import crud_wellness_goal
from wellness.data.goal_rules import GOAL_RULES, GoalRule
from wellness.models.wellness_goal import WellnessGoal
from wellness.schemas.wellness_goal import WellnessGoalCreate

logger = logging.getLogger(__name__)


class WellnessGoalService:
    """Service layer for user-authored wellness goals."""

    def __init__(self):
        self.crud = crud_wellness_goal
        self.rules = {rule.activity_type: rule for rule in GOAL_RULES}

    # =====================================================================
    # GOAL MANAGEMENT
    # =====================================================================

    def create_goal(self, db: Session, goal_in: WellnessGoalCreate) -> WellnessGoal:
        goal = self.crud.create(db, obj_in=goal_in)
        if goal.current_value >= goal.target_value:
            goal = self._apply_progress(db, goal, goal.current_value)
        return goal

    def get_user_goals(self, db: Session, user_id: UUID) -> List[WellnessGoal]:
        return self.crud.get_by_user(db, user_id=user_id)

    def get_goal(self, db: Session, goal_id: UUID) -> WellnessGoal:
        goal = self.crud.get(db, goal_id)
        if not goal:
            raise NotFoundError("Goal not found")
        return goal

    def set_goal_progress(
        self, db: Session, goal_id: UUID, current_value: float
    ) -> WellnessGoal:
        """
        Set a goal's progress to an absolute value.

        Raises:
            NotFoundError: If the goal does not exist
            ValidationError: If the value is lower than the current progress
        """
        goal = self.get_goal(db, goal_id)
        if current_value < goal.current_value:
            raise ValidationError(
                f"Goal progress cannot decrease (current {goal.current_value}, got {current_value})"
            )
        return self._apply_progress(db, goal, current_value)

    def delete_goal(self, db: Session, goal_id: UUID) -> WellnessGoal:
        goal = self.get_goal(db, goal_id)
        return self.crud.delete(db, db_obj=goal)

    # =====================================================================
    # ACTIVITY-DRIVEN PROGRESS
    # =====================================================================

    @staticmethod
    def goal_matches(rule: GoalRule, goal: WellnessGoal) -> bool:
        goal_type = getattr(goal.goal_type, "value", goal.goal_type)
        return goal_type in rule.goal_types or rule.title_keyword in (goal.title or "").lower()

    def update_goal_progress_for_activity(
        self,
        db: Session,
        *,
        user_id: UUID,
        activity_type: str,
        increment: float = 1,
    ) -> None:
        """
        Increment every open goal of the user that matches the activity.

        Each goal is written independently; a failed write is logged and the
        remaining goals are still updated.

        Raises:
            ValidationError: If increment is not positive
            DataFetchError: If the user's goals cannot be loaded
        """
        if increment <= 0:
            raise ValidationError("Goal progress increment must be positive")

        rule = self.rules.get(activity_type)
        if rule is None:
            logger.debug("No goal rule for activity type %r", activity_type)
            return

        goals = self.crud.get_incomplete_by_user(db, user_id=user_id)
        for goal in goals:
            if not self.goal_matches(rule, goal):
                continue
            try:
                self._apply_progress(db, goal, goal.current_value + increment)
            except PersistenceError:
                logger.error(
                    "Failed to update goal %s for activity %s", goal.id, activity_type,
                    exc_info=True,
                )

    def _apply_progress(
        self, db: Session, goal: WellnessGoal, new_value: float, now: Optional[datetime] = None
    ) -> WellnessGoal:
        is_completed = goal.is_completed or new_value >= goal.target_value
        patch = {"current_value": new_value, "is_completed": is_completed}
        if is_completed and goal.completed_at is None:
            patch["completed_at"] = now or datetime.now(timezone.utc)
            logger.info("Goal %s completed (%s/%s)", goal.id, new_value, goal.target_value)

        return self.crud.update(db, db_obj=goal, patch=patch)


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

wellness_goal_service = WellnessGoalService()
