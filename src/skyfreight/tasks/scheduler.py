import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from skyfreight.models.shipment import Shipment
from skyfreight.services import status as status_policy
from skyfreight.services.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 4.0


def _job_id(code: str) -> str:
    return f"tracking:{code.strip().upper()}"


class TrackingSimulator:
    """Walks looked-up shipments through their statuses on a timer.

    One interval job per tracking code; a job stops itself once its
    shipment is delivered or gone. Jobs are coroutines, so they run on the
    event loop thread alongside request handlers.
    """

    def __init__(
        self,
        store: RecordStore,
        scheduler: AsyncIOScheduler | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        self.store = store
        self.scheduler = scheduler or AsyncIOScheduler()
        self.interval_seconds = interval_seconds

    def lookup(self, code: str) -> Shipment | None:
        """Find a shipment by tracking code and (re)start its simulation."""
        shipment = self.store.find_by_tracking(code)
        if shipment is None:
            logger.info(f"Tracking code not found: {code!r}")
            return None

        self.stop(shipment.tracking)
        if not status_policy.is_terminal(shipment.status):
            self.scheduler.add_job(
                self.tracking_job,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                args=[shipment.tracking],
                id=_job_id(shipment.tracking),
                name=f"Simulate tracking for {shipment.tracking}",
                replace_existing=True,
            )
        return shipment

    def tick(self, code: str) -> Shipment | None:
        """Advance one step; unschedules the job when nothing is left to do."""
        shipment = self.store.advance_tracking(code)
        if shipment is None or status_policy.is_terminal(shipment.status):
            self.stop(code)
        return shipment

    async def tracking_job(self, code: str) -> None:
        try:
            self.tick(code)
        except Exception as e:
            logger.error(f"Tracking simulation for {code} failed: {e}")

    def is_running(self, code: str) -> bool:
        return self.scheduler.get_job(_job_id(code)) is not None

    def stop(self, code: str) -> bool:
        """Cancel the simulation for *code*; returns whether one was running."""
        if not self.is_running(code):
            return False
        self.scheduler.remove_job(_job_id(code))
        return True

    def start(self) -> None:
        """Start the background scheduler."""
        self.scheduler.start()
        logger.info("Scheduler started")

    def shutdown(self) -> None:
        """Shutdown the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Scheduler shutdown")
