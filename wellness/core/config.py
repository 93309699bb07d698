from typing import Generator, List
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from pydantic_settings import BaseSettings


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Wellness Insights API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./wellness.db"

    # Remote text generation
    HUGGING_FACE_API_KEY: str = ""
    HUGGING_FACE_MODEL_URL: str = (
        "https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium"
    )
    INSIGHT_REQUEST_TIMEOUT: float = 30.0
    INSIGHT_MAX_LENGTH: int = 150
    INSIGHT_TEMPERATURE: float = 0.7

    # Analysis windows
    ANALYSIS_WINDOW_DAYS: int = 7
    TREND_WINDOW_SIZE: int = 7
    MIN_MOOD_ENTRIES: int = 3

    # Achievements
    STREAK_LOOKBACK_DAYS: int = 30
    POSITIVE_MOOD_WINDOW_DAYS: int = 7

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"

    def missing_analysis_credentials(self) -> List[str]:
        """Names of credentials the analysis run cannot start without."""
        missing = []
        if not self.HUGGING_FACE_API_KEY:
            missing.append("HUGGING_FACE_API_KEY")
        return missing


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=(
        {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
    ),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
