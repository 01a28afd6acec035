import structlog

from ...domain.ports import HealthCheckRepository, HealthCheckRow
from ...utils import utc_now_iso

logger = structlog.get_logger()


class HealthCheckService:
    """Round-trips a record through the database to prove connectivity."""

    def __init__(self, repository: HealthCheckRepository, limit: int = 5) -> None:
        self._repository = repository
        self._limit = limit

    async def run(self) -> list[HealthCheckRow]:
        await self._repository.add(f"Lambda execution at {utc_now_iso()}")
        rows = await self._repository.latest(self._limit)
        logger.info("Database query successful", rows=len(rows))
        return rows
