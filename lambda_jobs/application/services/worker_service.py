"""
Application service for the queue worker.

Decodes each received message into a work item and hands it to the
processor registered for its type. Failures are isolated per message and
aggregated into a BatchResult; only setup failures (raised before this
service runs) fail the invocation.
"""

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

import structlog

from ...domain.entities import (
    UNKNOWN,
    BatchResult,
    ProcessingRecord,
    ProcessingStatus,
    WorkItem,
    WorkType,
)
from ...domain.exceptions import WorkItemError
from ...domain.ports import MetricsSink, WorkLogEntry, WorkLogRepository
from ...infrastructure.logging import Timer
from ..dtos import decode_work_item
from ..processors import WorkItemProcessor

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReceivedMessage:
    """A message as delivered by the queue transport."""

    message_id: str
    body: str

    @classmethod
    def from_sqs_record(cls, record: Mapping[str, Any]) -> "ReceivedMessage":
        return cls(message_id=record.get("messageId", ""), body=record.get("body", ""))


class WorkItemWorker:
    """
    Processes batches of work item messages.

    Following hexagonal architecture:
    - processors are injected as a WorkType -> processor lookup table
    - MetricsSink and the optional WorkLogRepository are injected ports
    """

    def __init__(
        self,
        processors: Mapping[WorkType, WorkItemProcessor],
        metrics: MetricsSink,
        work_log: WorkLogRepository | None = None,
    ) -> None:
        self._processors = processors
        self._metrics = metrics
        self._work_log = work_log

    async def process_batch(self, messages: Sequence[ReceivedMessage]) -> BatchResult:
        """
        Process every message, in arrival order.

        A failing message never stops the rest of the batch.
        """
        batch = BatchResult()
        for message in messages:
            batch.add(await self.process_message(message))

        logger.info(
            "Worker processing completed",
            total=batch.total,
            successful=batch.succeeded_count,
            failed=batch.failed_count,
        )
        return batch

    async def process_message(self, message: ReceivedMessage) -> ProcessingRecord:
        """Decode, dispatch and record a single message."""
        item: WorkItem | None = None
        logger.info("Processing SQS record", message_id=message.message_id)

        with Timer() as t:
            try:
                item = decode_work_item(message.body)
                await self._dispatch(item)
                record = ProcessingRecord(
                    work_id=item.id,
                    message_id=message.message_id,
                    work_type=item.type,
                    status=ProcessingStatus.SUCCESS,
                )
                logger.info("Successfully processed work item", work_id=item.id)
            except Exception as e:
                record = ProcessingRecord(
                    work_id=item.id if item else UNKNOWN,
                    message_id=message.message_id,
                    work_type=item.type if item else UNKNOWN,
                    status=ProcessingStatus.ERROR,
                    error=str(e),
                    retryable=e.retryable if isinstance(e, WorkItemError) else True,
                )
                logger.error(
                    "Failed to process work item",
                    message_id=message.message_id,
                    work_id=record.work_id,
                    error=str(e),
                )

        duration_ms = int(t.duration_ms)
        self._write_processing_point(record, duration_ms)
        await self._log_attempt(record, item, duration_ms)
        return record

    async def _dispatch(self, item: WorkItem) -> None:
        """Run the processor registered for the item's type."""
        work_type = item.work_type
        processor = self._processors.get(work_type)
        if processor is None:
            # Registry is exhaustive when built by build_processor_registry
            raise LookupError(f"No processor registered for work type: {work_type.value}")

        logger.info("Processing work item", work_id=item.id, work_type=item.type)
        with Timer() as t:
            result = await processor.process(item.payload)

        self._metrics.write_point(
            "work_item_completed",
            tags={"work_type": item.type},
            fields={"work_id": item.id, "processing_duration_ms": int(t.duration_ms)},
        )
        logger.info(
            "Completed processing for work item",
            work_id=item.id,
            work_type=item.type,
            result=result,
        )

    def _write_processing_point(self, record: ProcessingRecord, duration_ms: int) -> None:
        fields: dict[str, Any] = {
            "work_id": record.work_id if isinstance(record.work_id, int) else 0,
            "duration_ms": duration_ms,
        }
        if record.error is not None:
            fields["error_message"] = record.error
        self._metrics.write_point(
            "work_item_processing",
            tags={
                "work_type": record.work_type,
                "status": record.status.value,
                "message_id": record.message_id,
            },
            fields=fields,
        )

    async def _log_attempt(
        self,
        record: ProcessingRecord,
        item: WorkItem | None,
        duration_ms: int,
    ) -> None:
        if self._work_log is None:
            return
        try:
            await self._work_log.record(
                WorkLogEntry(
                    work_id=item.id if item else None,
                    work_type=record.work_type,
                    message_id=record.message_id,
                    status=record.status.value,
                    payload=asdict(item) if item else {},
                    processing_duration_ms=duration_ms,
                    error_message=record.error,
                )
            )
        except Exception as e:
            logger.error(
                "Failed to log work item processing",
                message_id=record.message_id,
                error=str(e),
            )
