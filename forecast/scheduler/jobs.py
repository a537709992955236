"""Housing Forecast — Background Jobs.

Two independent background components:
  • the reconciliation Poller (dedicated thread, fixed interval)
  • an APScheduler daily cron job that appends occupancy snapshots
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from forecast.config import settings
from forecast.connectors.service_hub.client import ServiceHubClient
from forecast.database import PollSession, get_session
from forecast.scheduler.poller import Poller, PollerState
from forecast.snapshots.projection import take_snapshots
from forecast.sync.cycle import PollCycle
from forecast.core.logging import get_logger

logger = get_logger("scheduler")

scheduler = AsyncIOScheduler()

hub_client = ServiceHubClient()
poller = Poller(
    cycle=PollCycle(session_factory=PollSession, client=hub_client),
    interval=settings.poll_interval_seconds,
)


def get_poller() -> Poller:
    """Dependency — the process-wide poller."""
    return poller


async def daily_snapshot_job():
    """Append today's per-location occupancy snapshots."""
    logger.info("Scheduled snapshot projection starting...")
    try:
        session = next(get_session())
        try:
            created = take_snapshots(session)
        finally:
            session.close()
        logger.info(f"Scheduled snapshot projection complete. {len(created)} snapshots")
    except Exception as e:
        logger.error(f"Scheduled snapshot projection failed: {e}")


def start_scheduler():
    """Start the poller and the snapshot cron job."""
    if settings.poller_enabled:
        poller.start()
    else:
        logger.info("Poller disabled via config")

    if not settings.scheduler_enabled:
        logger.info("Scheduler disabled via config")
        return

    scheduler.add_job(
        daily_snapshot_job,
        "cron",
        hour=settings.snapshot_hour,
        minute=0,
        id="daily_snapshot",
        replace_existing=True,
        misfire_grace_time=3600,
    )
    scheduler.start()
    logger.info(f"Scheduler started. Daily snapshots at {settings.snapshot_hour}:00 UTC")


def stop_scheduler():
    """Shutdown the scheduler and the poller gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    if poller.state is PollerState.RUNNING:
        poller.stop()
    hub_client.close()
