# wellness/api/routers/achievements.py
import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wellness.core.config import get_db
from wellness.schemas.achievement import (
    AchievementCheckRequest,
    AchievementCheckResponse,
    AchievementProgress,
    AchievementRead,
)
from wellness.services.achievement import achievement_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Achievements"])


@router.post(
    "/check-achievements",
    response_model=AchievementCheckResponse,
    summary="Unlock newly earned achievements",
)
def check_achievements(
    request: AchievementCheckRequest,
    db: Session = Depends(get_db),
):
    """
    Evaluate the achievement catalog for `userId`.

    Returns only achievements unlocked by this call.
    """
    if request.userId is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "User ID required"},
        )

    new_achievements = achievement_service.check_achievements(db, request.userId)
    logger.info(
        "Achievement check result for %s: %s",
        request.userId, [a.achievement_type for a in new_achievements],
    )
    return AchievementCheckResponse(
        success=True,
        newAchievements=[AchievementRead.model_validate(a) for a in new_achievements],
        count=len(new_achievements),
    )


@router.get(
    "/achievements/{user_id}",
    response_model=List[AchievementRead],
    summary="Get a user's achievements",
)
def get_user_achievements(user_id: UUID, db: Session = Depends(get_db)):
    return achievement_service.get_user_achievements(db, user_id)


@router.get(
    "/achievements/{user_id}/progress",
    response_model=AchievementProgress,
    summary="Get unlocked vs total achievements",
)
def get_achievement_progress(user_id: UUID, db: Session = Depends(get_db)):
    return achievement_service.get_achievement_progress(db, user_id)
