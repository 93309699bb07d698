# wellness/api/routers/goals.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness.core.config import get_db
from wellness.schemas.wellness_goal import (
    GoalProgressUpdate,
    WellnessGoalCreate,
    WellnessGoalRead,
)
from wellness.services.wellness_goal import wellness_goal_service

router = APIRouter(prefix="/goals", tags=["Wellness Goals"])


@router.post(
    "",
    response_model=WellnessGoalRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a wellness goal",
)
def create_goal(goal_in: WellnessGoalCreate, db: Session = Depends(get_db)):
    """
    Create a goal. Goals whose type or title mention mood, game, journal or
    analysis advance automatically when the matching activity is recorded.
    """
    return wellness_goal_service.create_goal(db, goal_in)


@router.get(
    "/{user_id}",
    response_model=List[WellnessGoalRead],
    summary="List a user's goals",
)
def get_user_goals(user_id: UUID, db: Session = Depends(get_db)):
    return wellness_goal_service.get_user_goals(db, user_id)


@router.put(
    "/{goal_id}/progress",
    response_model=WellnessGoalRead,
    summary="Set goal progress",
)
def set_goal_progress(
    goal_id: UUID,
    update: GoalProgressUpdate,
    db: Session = Depends(get_db),
):
    """Progress can only move forward; completion is stamped once."""
    return wellness_goal_service.set_goal_progress(db, goal_id, update.current_value)


@router.delete(
    "/{goal_id}",
    summary="Delete a goal",
)
def delete_goal(goal_id: UUID, db: Session = Depends(get_db)):
    wellness_goal_service.delete_goal(db, goal_id)
    return {"message": "Goal deleted successfully"}
