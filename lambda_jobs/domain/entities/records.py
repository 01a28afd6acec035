from dataclasses import dataclass, field
from enum import Enum


class DispatchOutcome(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class ProcessingStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


UNKNOWN = "unknown"


@dataclass(frozen=True)
class DispatchRecord:
    """Outcome of publishing one work item."""

    work_id: int
    work_type: str
    outcome: DispatchOutcome
    message_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingRecord:
    """Outcome of processing one received message."""

    work_id: int | str
    message_id: str
    work_type: str
    status: ProcessingStatus
    error: str | None = None
    retryable: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status == ProcessingStatus.SUCCESS


@dataclass
class BatchResult:
    """Aggregated outcome of one worker invocation."""

    succeeded: list[ProcessingRecord] = field(default_factory=list)
    failed: list[ProcessingRecord] = field(default_factory=list)

    def add(self, record: ProcessingRecord) -> None:
        if record.succeeded:
            self.succeeded.append(record)
        else:
            self.failed.append(record)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def is_partial_failure(self) -> bool:
        return bool(self.failed)

    @property
    def status_code(self) -> int:
        """200 when every item succeeded, 207 (multi-status) otherwise."""
        return 207 if self.failed else 200
