# wellness/api/routers/mood_analysis.py
import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wellness.core.config import get_db
from wellness.core.exceptions import DatabaseError
from wellness.crud.mood_analysis import crud_mood_analysis
from wellness.schemas.mood_analysis import MoodAnalysisRead, MoodAnalysisResponse
from wellness.services.insight_generator import SOURCE_LOCAL
from wellness.services.mood_analysis import MoodAnalysisService, get_mood_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mood-analysis", tags=["Mood Analysis"])


# =====================================================================
# RUN ANALYSIS
# =====================================================================

@router.api_route(
    "",
    methods=["GET", "POST"],
    response_model=MoodAnalysisResponse,
    response_model_exclude_none=True,
    summary="Run mood analysis for a user",
)
def run_mood_analysis(
    x_user_id: Optional[UUID] = Header(None),
    db: Session = Depends(get_db),
    service: MoodAnalysisService = Depends(get_mood_analysis_service),
):
    """
    Analyze the last week of mood and journal entries for the user given in
    the `x-user-id` header.

    - Remote generation failures fall back to a local analysis
      (`local_analysis: true`)
    - Storage failures return `fallback: true` so the client can show manual
      insights instead of an error page
    """
    if x_user_id is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "User ID required",
                "details": "Please provide user ID in x-user-id header",
            },
        )

    now = datetime.now(timezone.utc)
    try:
        insights = service.run_daily_analysis(db, user_id=x_user_id, now=now)
    except DatabaseError:
        logger.error("Mood analysis failed for user %s", x_user_id, exc_info=True)
        return MoodAnalysisResponse(
            success=False,
            error="Analysis temporarily unavailable",
            message="Please try again later",
            fallback=True,
            timestamp=now,
        )

    if not insights:
        return MoodAnalysisResponse(
            success=False,
            error="No mood data available for analysis",
            message="Please add more mood entries to get insights",
            timestamp=now,
        )

    local = any(insight.source == SOURCE_LOCAL for insight in insights)
    return MoodAnalysisResponse(
        success=True,
        message=(
            "Local mood analysis completed successfully" if local
            else "Mood analysis completed successfully"
        ),
        insights=insights,
        local_analysis=local,
        timestamp=now,
    )


# =====================================================================
# HISTORY
# =====================================================================

@router.get(
    "/{user_id}/history",
    response_model=List[MoodAnalysisRead],
    summary="Get past analysis runs",
)
def get_analysis_history(
    user_id: UUID,
    limit: int = 30,
    db: Session = Depends(get_db),
):
    """Past analysis runs for a user, newest first."""
    return crud_mood_analysis.get_by_user(db, user_id=user_id, limit=limit)
