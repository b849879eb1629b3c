"""
CareSync - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .api import medications_router, doses_router, vitals_router, assistant_router
from .core import init_care_manager
from .core.logging_config import setup_logging
from .core.reminder_job import ReminderJob
from .middleware import RequestLoggingMiddleware
from .storage import LocalStorage, init_care_storage

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    storage = LocalStorage(settings.local_storage_path)
    care_storage = init_care_storage(storage)
    manager = init_care_manager(
        care_storage,
        reminder_tolerance_minutes=settings.reminder_tolerance_minutes,
    )
    await manager.load()

    reminder_job = ReminderJob(manager, interval_seconds=settings.reminder_poll_seconds)
    if settings.reminder_job_enabled:
        reminder_job.start()
    app.state.reminder_job = reminder_job

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"LLM provider: {settings.llm_provider} (configured={bool(settings.llm_api_key)})")
    yield
    # Shutdown
    reminder_job.stop()
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Medication schedule, adherence and vitals tracking with AI prescription scanning",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(medications_router)
app.include_router(doses_router)
app.include_router(vitals_router)
app.include_router(assistant_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "caresync.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
