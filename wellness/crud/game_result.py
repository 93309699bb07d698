# crud/game_result.py
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.models.game_result import GameResult
from wellness.schemas.game_result import GameResultCreate


class CRUDGameResult:
    """CRUD operations for GameResult model. Results are never updated."""

    def create(self, db: Session, *, obj_in: GameResultCreate) -> GameResult:
        db_obj = GameResult(**obj_in.model_dump())
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to save game result: {e}") from e
        return db_obj

    def count_by_user(self, db: Session, *, user_id: UUID) -> int:
        try:
            return db.query(GameResult).filter(GameResult.user_id == user_id).count()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to count game results: {e}") from e


# Create singleton instance
crud_game_result = CRUDGameResult()
