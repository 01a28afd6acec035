"""
Outbound port for work item bookkeeping.

Each processing attempt is appended to a log; implementations live in the
infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WorkLogEntry:
    """One processing attempt."""

    work_id: int | None
    work_type: str
    message_id: str
    status: str
    payload: dict[str, Any]
    processing_duration_ms: int
    error_message: str | None = None


class WorkLogRepository(ABC):
    """Outbound port for the work item processing log."""

    @abstractmethod
    async def record(self, entry: WorkLogEntry) -> None:
        """
        Append a processing attempt.

        Args:
            entry: The attempt to persist
        """
        ...
