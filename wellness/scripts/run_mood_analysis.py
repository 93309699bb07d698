"""
Batch entry point for the daily mood analysis, meant for an external
scheduler:

    python -m wellness.scripts.run_mood_analysis [--user-id UUID]
"""
import argparse
import logging
import sys
from uuid import UUID

from wellness.core.config import Base, SessionLocal, engine, settings
from wellness.core.exceptions import ConfigurationError, DatabaseError
from wellness.services.insight_generator import SOURCE_LOCAL
from wellness.services.mood_analysis import get_mood_analysis_service
import wellness.models  # noqa: F401

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the daily mood analysis.")
    parser.add_argument("--user-id", type=UUID, default=None, help="Analyze only this user")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        service = get_mood_analysis_service()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        insights = service.run_daily_analysis(db, user_id=args.user_id)
    except DatabaseError:
        logger.exception("Failed to run mood analysis")
        return 1
    finally:
        db.close()

    local = sum(1 for insight in insights if insight.source == SOURCE_LOCAL)
    logger.info("Mood analysis completed: %d users (%d local)", len(insights), local)
    return 0


if __name__ == "__main__":
    sys.exit(main())
