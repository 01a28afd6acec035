"""
Outbound port for time-series metrics.

Metrics are best-effort: implementations must never raise from these
methods, so observability cannot change handler outcomes.
"""

from abc import ABC, abstractmethod
from typing import Any


class MetricsSink(ABC):
    """Best-effort sink for measurement points."""

    @abstractmethod
    def write_point(
        self,
        measurement: str,
        tags: dict[str, str] | None = None,
        fields: dict[str, Any] | None = None,
    ) -> None:
        """Buffer a point for the next flush."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Send buffered points."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Flush remaining points and release the connection."""
        ...
