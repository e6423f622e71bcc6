"""
Background Scheduler - periodic expiration sweep

Expired jobs must come down even for employers whose scrapers stopped
running, so the sweep runs on its own interval in addition to the sweep
at the end of every scrape batch.

Default Schedule: Every 6 hours (configurable via SWEEP_INTERVAL_HOURS)
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from jobboard.config import get_settings
from jobboard.database import get_db_session
from jobboard.repository import JobRepository
from jobboard.schemas import SweepResult
from jobboard.services.notifications import CeleryNotifier
from jobboard.services.sweeper import ExpirationSweeper

logger = logging.getLogger(__name__)

settings = get_settings()
scheduler = AsyncIOScheduler()


def run_expiration_sweep() -> SweepResult:
    """
    Deactivate all expired jobs in a fresh session.

    Plain function: APScheduler runs it in its thread pool, so the
    blocking database calls stay off the event loop.
    """
    session = get_db_session()
    try:
        result = ExpirationSweeper(JobRepository(session), CeleryNotifier()).sweep()
        logger.info(f"Scheduled sweep deactivated {result.count} expired jobs")
        return result
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def start_scheduler():
    """Start the background scheduler"""
    scheduler.add_job(
        run_expiration_sweep,
        trigger=IntervalTrigger(hours=settings.sweep_interval_hours),
        id="expiration_sweep",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started: sweeping expired jobs every {settings.sweep_interval_hours} hours")


def stop_scheduler():
    """Stop the background scheduler"""
    scheduler.shutdown()
