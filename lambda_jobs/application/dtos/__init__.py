from .response_dto import (
    CronJobDTO,
    DispatchResponseDTO,
    MessageSentDTO,
    ProcessedDataDTO,
    ProcessedMessageDTO,
    ProcessingSummaryDTO,
    WorkerResponseDTO,
)
from .work_item_dto import WorkItemMessageDTO, decode_work_item, encode_work_item

__all__ = [
    "CronJobDTO",
    "DispatchResponseDTO",
    "MessageSentDTO",
    "ProcessedDataDTO",
    "ProcessedMessageDTO",
    "ProcessingSummaryDTO",
    "WorkItemMessageDTO",
    "WorkerResponseDTO",
    "decode_work_item",
    "encode_work_item",
]
