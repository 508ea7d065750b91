"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import Depends, FastAPI
import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from .config import settings
from .database import Base, engine, get_db
from .exceptions import register_exception_handlers
from .core.middleware import FunctionAwareCORSMiddleware, setup_middlewares
# Model modules must be imported before create_all so every table is registered
from .auth import models as auth_models  # noqa: F401
from .core import audit_models  # noqa: F401
from .patients import models as patient_models  # noqa: F401
from .predictions import models as prediction_models  # noqa: F401
from .auth.router import router as auth_router
from .patients.router import router as patients_router
from .predictions.router import router as predictions_router
from .reviews.router import router as reviews_router

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

logger.info(f"Starting {settings.app_name} v{settings.app_version}")

# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Disease risk predictions, drug recommendations and doctor review",
    version=settings.app_version
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    FunctionAwareCORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)
app.include_router(patients_router)
app.include_router(predictions_router)
app.include_router(reviews_router)

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": f"Welcome to {settings.app_name}", "version": settings.app_version}

# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Runs a trivial query so a lost database connection shows up as
    ``"database": "unavailable"`` while the API itself still answers.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {str(e)}")
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "healthy", "database": "connected"}
