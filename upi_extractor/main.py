import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from upi_extractor.core.config import settings
from upi_extractor.routes.routes import router
from upi_extractor.services.cron_service import LogRetentionCronJob
from upi_extractor.services.initial_setup_service import run_initial_setup
from upi_extractor.utils.exception_handlers import register_exception_handlers
from upi_extractor.middleware.api_key_middleware import APIKeyMiddleware
from upi_extractor.middleware.request_id_middleware import RequestIDMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize scheduler
scheduler = AsyncIOScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup: tables and default admin. A broken database should stop the boot.
    logger.info("Running initial data setup...")
    await run_in_threadpool(run_initial_setup)

    logger.info("Starting scheduler...")
    LogRetentionCronJob(scheduler).register()
    scheduler.start()
    logger.info("Scheduler started successfully!")

    try:
        yield
    finally:
        logger.info("Stopping scheduler...")
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped!")


# Create FastAPI app
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# API key gate runs inside the request ID middleware so rejections carry the ID
app.add_middleware(APIKeyMiddleware, prefix="/api")

# Add Request ID middleware
app.add_middleware(RequestIDMiddleware)

# Configure CORS
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register centralized exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(router, prefix="/api", tags=["api"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} is running",
        "status": "ok"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "scheduler": "running" if scheduler.running else "stopped"
    }
