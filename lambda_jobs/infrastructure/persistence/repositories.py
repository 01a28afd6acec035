from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.ports import (
    HealthCheckRepository,
    HealthCheckRow,
    WorkLogEntry,
    WorkLogRepository,
)
from .models import HealthCheckModel, WorkItemLogModel


class PostgresWorkLogRepository(WorkLogRepository):
    """PostgreSQL implementation of WorkLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, entry: WorkLogEntry) -> None:
        self._session.add(WorkItemLogModel.from_entry(entry))
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise


class PostgresHealthCheckRepository(HealthCheckRepository):
    """PostgreSQL implementation of HealthCheckRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: str) -> None:
        self._session.add(HealthCheckModel(message=message))
        await self._session.commit()

    async def latest(self, limit: int = 5) -> list[HealthCheckRow]:
        stmt = (
            select(HealthCheckModel)
            .order_by(HealthCheckModel.timestamp.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [model.to_row() for model in result.scalars()]
