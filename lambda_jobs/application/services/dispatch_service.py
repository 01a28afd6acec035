"""
Application service for the cron dispatcher.

Publishes a batch of work items to the work queue. Dispatch is
all-or-nothing: the first publish failure abandons the rest of the batch.
"""

from collections.abc import Sequence

import structlog

from ...domain.entities import DispatchOutcome, DispatchRecord, WorkItem
from ...domain.exceptions import ConfigurationError, DispatchAbortedError
from ...domain.ports import MetricsSink, QueueMessage, QueuePublisher
from ..dtos import encode_work_item

logger = structlog.get_logger()


class WorkDispatchService:
    """
    Enqueues work items for the worker.

    Depends on the QueuePublisher and MetricsSink ports, injected by the
    handler's composition root.
    """

    def __init__(
        self,
        publisher: QueuePublisher,
        metrics: MetricsSink,
        queue_url: str | None,
    ) -> None:
        self._publisher = publisher
        self._metrics = metrics
        self._queue_url = queue_url

    async def dispatch(self, items: Sequence[WorkItem]) -> list[DispatchRecord]:
        """
        Publish each item as its own message, in order.

        Args:
            items: Work items to enqueue

        Returns:
            One sent record per item

        Raises:
            ConfigurationError: If no queue URL is configured
            DispatchAbortedError: On the first publish failure
        """
        if not self._queue_url:
            raise ConfigurationError("SQS_QUEUE_URL environment variable is not set")

        records: list[DispatchRecord] = []
        for item in items:
            message = QueueMessage(
                body=encode_work_item(item),
                attributes={"workType": item.type, "workId": item.id},
            )
            try:
                message_id = await self._publisher.publish(self._queue_url, message)
            except Exception as e:
                logger.error(
                    "Failed to send work item",
                    work_id=item.id,
                    work_type=item.type,
                    error=str(e),
                )
                records.append(
                    DispatchRecord(
                        work_id=item.id,
                        work_type=item.type,
                        outcome=DispatchOutcome.FAILED,
                        error=str(e),
                    )
                )
                raise DispatchAbortedError(item.id, records, e) from e

            records.append(
                DispatchRecord(
                    work_id=item.id,
                    work_type=item.type,
                    outcome=DispatchOutcome.SENT,
                    message_id=message_id,
                )
            )
            logger.info(
                "Sent work item",
                work_id=item.id,
                work_type=item.type,
                message_id=message_id,
            )
            self._metrics.write_point(
                "sqs_messages",
                tags={"work_type": item.type, "status": DispatchOutcome.SENT.value},
                fields={"work_id": item.id, "message_id": message_id},
            )

        logger.info("Dispatched work items", count=len(records))
        return records
