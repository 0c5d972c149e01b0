"""Background job scheduler for Lorekeeper."""

import logging
from datetime import timedelta

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from lorekeeper.config import Settings
from lorekeeper.services.cache import ResponseCache
from lorekeeper.services.jobs import JobTracker

logger = logging.getLogger(__name__)


class SchedulerService:
    """Runs the periodic recovery and cache purge jobs.

    Recovery restarts stories stuck in pending. The purge drops expired
    response cache entries that were never read again, and only runs when
    entries can expire.
    """

    def __init__(
        self, job_tracker: JobTracker, cache: ResponseCache, settings: Settings
    ) -> None:
        """Initialize the scheduler service."""
        self.scheduler = AsyncIOScheduler()
        self.job_tracker = job_tracker
        self.cache = cache
        self.settings = settings

    @property
    def recovery_enabled(self) -> bool:
        return self.settings.recovery_interval_minutes > 0

    @property
    def cache_purge_enabled(self) -> bool:
        return self.settings.cache_ttl_seconds > 0

    async def _run_recovery_job(self) -> None:
        """Restart summarization for stories whose job apparently died."""
        logger.info("Starting recovery job for pending stories...")
        try:
            count = await self.job_tracker.resume_stale(
                min_age=timedelta(minutes=self.settings.recovery_min_age_minutes)
            )
            if count:
                logger.info(f"Recovery job: restarted {count} summarizations")
            else:
                logger.info("No stale pending stories found")
        except Exception as e:
            logger.error(f"Recovery job failed: {e}", exc_info=True)

    async def _run_cache_purge_job(self) -> None:
        """Drop expired response cache entries."""
        try:
            removed = self.cache.purge_expired()
            if removed:
                logger.info(f"Cache purge job: removed {removed} expired entries")
        except Exception as e:
            logger.error(f"Cache purge job failed: {e}", exc_info=True)

    def start(self) -> None:
        """Register the configured jobs and start the scheduler if any are enabled."""
        if self.recovery_enabled:
            interval = self.settings.recovery_interval_minutes
            self.scheduler.add_job(
                self._run_recovery_job,
                trigger=IntervalTrigger(minutes=interval),
                id="recovery_job",
                name="Recovery Job for Pending Stories",
                replace_existing=True,
            )
            logger.info(f"Scheduled recovery job (every {interval}m)")
        else:
            logger.info("Recovery job disabled")

        if self.cache_purge_enabled:
            interval = self.settings.cache_ttl_seconds
            self.scheduler.add_job(
                self._run_cache_purge_job,
                trigger=IntervalTrigger(seconds=interval),
                id="cache_purge_job",
                name="Expired Response Cache Purge",
                replace_existing=True,
            )
            logger.info(f"Scheduled cache purge job (every {interval}s)")

        if self.scheduler.get_jobs():
            self.scheduler.start()

    def shutdown(self) -> None:
        """Shutdown the scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")
