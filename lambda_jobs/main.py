"""Local runner: fires the dispatcher on an interval, standing in for the cron rule."""

import asyncio
import signal
from types import SimpleNamespace
from uuid import uuid4

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .config import settings
from .container import get_container
from .handlers.dispatcher import dispatch
from .infrastructure.logging import configure_logging

configure_logging(settings.service_name)

logger = structlog.get_logger()

# Global state
_running = True


async def dispatch_job() -> None:
    """Job that runs on schedule to enqueue the work batch."""
    context = SimpleNamespace(function_name="lambda-cron-local", aws_request_id=str(uuid4()))
    try:
        await dispatch({"source": "local.scheduler"}, context, get_container())
    except Exception as e:
        logger.warning("Dispatch job failed, will retry next interval", error=str(e))


async def main() -> None:
    """Main entry point for the local dispatcher."""
    global _running

    logger.info("Starting local dispatcher", service=settings.service_name)

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        dispatch_job,
        "interval",
        seconds=settings.dispatch_interval_seconds,
        id="dispatch_work_items",
        max_instances=1,  # Prevent overlapping runs
    )

    loop = asyncio.get_running_loop()

    def shutdown():
        global _running
        _running = False
        scheduler.shutdown(wait=False)

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown)

    scheduler.start()
    logger.info(
        "Local dispatcher started",
        interval_seconds=settings.dispatch_interval_seconds,
    )

    # Run initial dispatch immediately
    await dispatch_job()

    try:
        while _running:
            await asyncio.sleep(1)
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("Local dispatcher shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
