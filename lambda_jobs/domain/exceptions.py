"""Domain exceptions shared by the handlers."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import DispatchRecord


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""

    pass


class WorkItemError(Exception):
    """Base class for failures that are scoped to a single work item."""

    #: Whether redelivering the message could succeed.
    retryable: bool = True


class WorkItemDecodeError(WorkItemError):
    """Raised when a message body cannot be decoded into a work item."""

    retryable = False


class UnknownWorkTypeError(WorkItemError):
    """Raised when a work item carries a type tag with no processor."""

    retryable = False

    def __init__(self, work_type: str) -> None:
        super().__init__(f"Unknown work item type: {work_type}")
        self.work_type = work_type


class InvalidPayloadError(WorkItemError):
    """Raised by a processor when a payload field is missing or malformed."""

    retryable = False


class DispatchAbortedError(Exception):
    """Raised when publishing a work item fails and the batch is abandoned.

    Carries the dispatch records produced so far, ending with the failed one.
    """

    def __init__(self, work_id: int, records: list["DispatchRecord"], cause: Exception) -> None:
        super().__init__(f"Failed to send work item {work_id} to SQS: {cause}")
        self.work_id = work_id
        self.records = records


class StageError(Exception):
    """Raised when a pipeline stage fails."""

    def __init__(self, stage: str, reason: str) -> None:
        super().__init__(f"{stage} failed: {reason}")
        self.stage = stage
