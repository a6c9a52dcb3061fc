from abc import ABC, abstractmethod
from datetime import datetime, timedelta
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from starlette.concurrency import run_in_threadpool

from upi_extractor.core.config import settings
from upi_extractor.db_config import SessionLocal
from upi_extractor.repositories import LogRepository
from upi_extractor.utils.utils import utc_now

logger = logging.getLogger(__name__)


class BaseCronJob(ABC):
    """Base class for all cron jobs"""

    def __init__(self, scheduler: AsyncIOScheduler):
        self.scheduler = scheduler
        self.job_id = self.__class__.__name__

    @abstractmethod
    async def execute(self):
        """Execute the cron job logic"""
        pass

    @abstractmethod
    def get_trigger(self):
        """Return the trigger configuration for the job"""
        pass

    def register(self):
        """Register the cron job with the scheduler"""
        trigger = self.get_trigger()
        self.scheduler.add_job(
            self.execute,
            trigger=trigger,
            id=self.job_id,
            name=self.job_id,
            replace_existing=True
        )
        logger.info(f"Registered cron job: {self.job_id}")


class LogRetentionCronJob(BaseCronJob):
    """Deletes processing logs older than the retention window."""

    def get_trigger(self):
        return IntervalTrigger(minutes=settings.LOG_PURGE_INTERVAL_MINUTES)

    def purge(self, now: datetime = None) -> int:
        cutoff = (now or utc_now()) - timedelta(days=settings.LOG_RETENTION_DAYS)
        db = SessionLocal()
        try:
            return LogRepository(db).delete_older_than(cutoff)
        finally:
            db.close()

    async def execute(self):
        try:
            deleted = await run_in_threadpool(self.purge)
            logger.info(f"[{datetime.now()}] LogRetentionCronJob removed {deleted} expired logs")
        except Exception as e:
            logger.error(f"❌ Log retention cron job failed: {str(e)}")
            raise e
