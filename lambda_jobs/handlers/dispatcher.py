"""Cron-triggered dispatcher: enqueues the fixed work batch onto SQS."""

import asyncio
from typing import Any

import structlog

from ..application.catalog import default_work_items
from ..application.dtos import (
    CronJobDTO,
    DispatchResponseDTO,
    MessageSentDTO,
    ProcessedDataDTO,
)
from ..application.services import WorkDispatchService
from ..config import settings
from ..container import Container, get_container
from ..domain.ports import MetricsSink
from ..infrastructure.logging import Timer, configure_logging
from ..utils import utc_now_iso
from .context import bind_invocation, function_name

configure_logging(settings.service_name)

logger = structlog.get_logger()


async def dispatch(event: dict[str, Any], context: Any, container: Container) -> dict[str, Any]:
    """
    Publish the cron batch.

    Any failure (setup or publish) is recorded and re-raised so the
    scheduler's retry policy applies.
    """
    request_id = bind_invocation(context)
    logger.info("Cron job triggered", timestamp=utc_now_iso(), trigger=event)

    metrics: MetricsSink | None = None
    base_tags = {"function_name": function_name(context)}

    try:
        metrics = container.open_metrics()
        metrics.write_point(
            "cron_job_execution",
            tags={**base_tags, "status": "started"},
            fields={"request_id": request_id},
        )

        service = WorkDispatchService(
            publisher=container.publisher,
            metrics=metrics,
            queue_url=container.settings.sqs_queue_url,
        )
        with Timer() as t:
            records = await service.dispatch(default_work_items())
        execution_ms = int(t.duration_ms)

        metrics.write_point(
            "cron_job_execution",
            tags={**base_tags, "status": "completed"},
            fields={
                "messages_sent": len(records),
                "execution_duration_ms": execution_ms,
                "request_id": request_id,
            },
        )
        metrics.flush()
    except Exception as e:
        logger.error("Cron job error", error=str(e))
        if metrics is not None:
            metrics.write_point(
                "cron_job_execution",
                tags={**base_tags, "status": "error"},
                fields={"error_message": str(e), "request_id": request_id},
            )
            metrics.flush()
        raise
    finally:
        if metrics is not None:
            metrics.close()

    response = DispatchResponseDTO(
        status_code=200,
        timestamp=utc_now_iso(),
        environment=container.settings.environment,
        cron_job=CronJobDTO(
            success=True,
            processed_data=ProcessedDataDTO(
                messages_sent=[MessageSentDTO.from_record(r) for r in records],
                execution_time_ms=execution_ms,
                timestamp=utc_now_iso(),
            ),
        ),
    ).to_response()

    logger.info("Cron job completed successfully", messages_sent=len(records))
    return response


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler for EventBridge scheduled events."""
    return asyncio.run(dispatch(event, context, get_container()))
