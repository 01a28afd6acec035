"""Response DTOs returned by the Lambda handlers."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...domain.entities import BatchResult, DispatchRecord, ProcessingRecord


class CamelModel(BaseModel):
    """Serializes field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MessageSentDTO(CamelModel):
    work_id: int
    message_id: str | None
    type: str

    @classmethod
    def from_record(cls, record: DispatchRecord) -> "MessageSentDTO":
        return cls(work_id=record.work_id, message_id=record.message_id, type=record.work_type)


class ProcessedDataDTO(CamelModel):
    messages_sent: list[MessageSentDTO]
    execution_time_ms: int
    timestamp: str


class CronJobDTO(CamelModel):
    success: bool
    error: str | None = None
    processed_data: ProcessedDataDTO | None = None


class DispatchResponseDTO(CamelModel):
    status_code: int
    timestamp: str
    environment: str
    cron_job: CronJobDTO


class ProcessedMessageDTO(CamelModel):
    work_id: int | str
    message_id: str
    type: str
    status: str
    error: str | None = None

    @classmethod
    def from_record(cls, record: ProcessingRecord) -> "ProcessedMessageDTO":
        return cls(
            work_id=record.work_id,
            message_id=record.message_id,
            type=record.work_type,
            status=record.status.value,
            error=record.error,
        )


class ProcessingSummaryDTO(CamelModel):
    total_messages: int
    successful_messages: int
    failed_messages: int
    processed_items: list[ProcessedMessageDTO]
    failed_items: list[ProcessedMessageDTO]

    @classmethod
    def from_batch(cls, batch: BatchResult) -> "ProcessingSummaryDTO":
        return cls(
            total_messages=batch.total,
            successful_messages=batch.succeeded_count,
            failed_messages=batch.failed_count,
            processed_items=[ProcessedMessageDTO.from_record(r) for r in batch.succeeded],
            failed_items=[ProcessedMessageDTO.from_record(r) for r in batch.failed],
        )


class WorkerResponseDTO(CamelModel):
    status_code: int
    timestamp: str
    environment: str
    processing: ProcessingSummaryDTO
