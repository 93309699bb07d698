import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wellness.core.config import Base, engine, settings
from wellness.core.exceptions import register_exception_handlers
from wellness.api.routers import achievements, activities, goals, mood_analysis
import wellness.models  # noqa: F401  registers tables on Base.metadata

# =====================================================================
# LOGGING
# =====================================================================

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Mood trends, insights, achievements and wellness goals",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE - MUST BE FIRST!
# =====================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

logger.info("CORS configured for origins: %s", settings.CORS_ORIGINS)

# =====================================================================
# ERROR HANDLING
# =====================================================================

register_exception_handlers(app)

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(mood_analysis.router)
app.include_router(achievements.router)
app.include_router(goals.router)
app.include_router(activities.router)

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "mood_analysis": "/mood-analysis",
            "check_achievements": "/check-achievements",
            "achievements": "/achievements/{user_id}",
            "goals": "/goals",
            "moods": "/moods",
            "journals": "/journals",
            "games": "/games",
        },
    }
