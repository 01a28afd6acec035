"""SQS-triggered worker: processes a batch of work item messages."""

import asyncio
from contextlib import AsyncExitStack
from typing import Any

import structlog

from ..application.dtos import ProcessingSummaryDTO, WorkerResponseDTO
from ..application.processors import build_processor_registry
from ..application.services import ReceivedMessage, WorkItemWorker
from ..config import settings
from ..container import Container, get_container
from ..domain.entities import BatchResult
from ..domain.ports import MetricsSink, WorkLogRepository
from ..infrastructure.logging import configure_logging
from ..infrastructure.persistence import Database, PostgresWorkLogRepository
from ..utils import utc_now_iso
from .context import bind_invocation

configure_logging(settings.service_name)

logger = structlog.get_logger()


def build_response(batch: BatchResult, container: Container) -> dict[str, Any]:
    response = WorkerResponseDTO(
        status_code=batch.status_code,
        timestamp=utc_now_iso(),
        environment=container.settings.environment,
        processing=ProcessingSummaryDTO.from_batch(batch),
    ).to_response()

    if container.settings.report_batch_item_failures:
        response["batchItemFailures"] = [
            {"itemIdentifier": r.message_id} for r in batch.failed if r.retryable
        ]
    return response


async def process(event: dict[str, Any], context: Any, container: Container) -> dict[str, Any]:
    """
    Process one SQS batch.

    Setup failures (secret, metrics, database) propagate so SQS redelivers the
    whole batch; per-message failures are reported in the response.
    """
    bind_invocation(context)
    records = event.get("Records", [])
    logger.info("Worker Lambda triggered", timestamp=utc_now_iso(), records=len(records))

    metrics: MetricsSink | None = None
    database: Database | None = None

    try:
        async with AsyncExitStack() as stack:
            metrics = container.open_metrics()

            work_log: WorkLogRepository | None = None
            if container.settings.work_log_enabled:
                database = container.open_database()
                await database.create_tables()
                session = await stack.enter_async_context(database.session())
                work_log = PostgresWorkLogRepository(session)
                logger.info("Connected to PostgreSQL database")

            worker = WorkItemWorker(
                processors=build_processor_registry(
                    metrics, delay_scale=container.settings.simulated_delay_scale
                ),
                metrics=metrics,
                work_log=work_log,
            )
            batch = await worker.process_batch(
                [ReceivedMessage.from_sqs_record(r) for r in records]
            )
    except Exception as e:
        logger.error("Worker Lambda error", error=str(e))
        raise
    finally:
        if metrics is not None:
            metrics.close()
        if database is not None:
            try:
                await database.close()
                logger.info("Database connection closed")
            except Exception as e:
                logger.error("Error closing database connection", error=str(e))

    return build_response(batch, container)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler for the SQS event source."""
    return asyncio.run(process(event, context, get_container()))
