from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..exceptions import UnknownWorkTypeError


class WorkType(str, Enum):
    """Supported work item types."""

    DATA_PROCESSING = "data_processing"
    EMAIL_NOTIFICATION = "email_notification"
    DATA_CLEANUP = "data_cleanup"
    REPORT_GENERATION = "report_generation"
    BACKUP_TASK = "backup_task"

    @classmethod
    def resolve(cls, value: str) -> "WorkType":
        """Map a wire type tag to a WorkType by exact match."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownWorkTypeError(value) from None


@dataclass(frozen=True)
class WorkItem:
    """A unit of asynchronous work."""

    id: int
    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, id: int, work_type: WorkType, payload: dict[str, Any]) -> "WorkItem":
        """Factory method for work items built from a known type."""
        return cls(id=id, type=work_type.value, payload=dict(payload))

    @property
    def work_type(self) -> WorkType:
        """The resolved type; raises UnknownWorkTypeError for unknown tags."""
        return WorkType.resolve(self.type)
