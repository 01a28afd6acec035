"""Outbound port for the health check table."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HealthCheckRow:
    id: int
    timestamp: datetime
    message: str


class HealthCheckRepository(ABC):
    """Outbound port for health check bookkeeping."""

    @abstractmethod
    async def add(self, message: str) -> None:
        """Insert a health check record."""
        ...

    @abstractmethod
    async def latest(self, limit: int = 5) -> list[HealthCheckRow]:
        """Return the most recent records, newest first."""
        ...
