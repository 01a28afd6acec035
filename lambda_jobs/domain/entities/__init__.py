from .records import (
    UNKNOWN,
    BatchResult,
    DispatchOutcome,
    DispatchRecord,
    ProcessingRecord,
    ProcessingStatus,
)
from .work_item import WorkItem, WorkType

__all__ = [
    "UNKNOWN",
    "BatchResult",
    "DispatchOutcome",
    "DispatchRecord",
    "ProcessingRecord",
    "ProcessingStatus",
    "WorkItem",
    "WorkType",
]
