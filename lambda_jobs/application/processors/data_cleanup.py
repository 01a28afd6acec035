from typing import Any

import structlog

from ...domain.entities import WorkType
from .base import WorkItemProcessor, require_int, require_str

logger = structlog.get_logger()

CLEANABLE_TABLES = frozenset({"old_logs"})


class DataCleanupProcessor(WorkItemProcessor):
    """Purges rows older than a retention window from a known table."""

    delay_ms = 150

    @property
    def work_type(self) -> WorkType:
        return WorkType.DATA_CLEANUP

    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info("Processing data cleanup", payload=payload)
        table = require_str(payload, "table")
        days = require_int(payload, "days")

        if table not in CLEANABLE_TABLES:
            logger.info("Table not eligible for cleanup", table=table)
            return {"table": table, "records_deleted": 0}

        await self._simulate_work()
        records_deleted = self._rng.randrange(100)
        logger.info(
            "Cleaned up old records",
            table=table,
            records_deleted=records_deleted,
            retention_days=days,
        )

        self._metrics.write_point(
            "data_cleanup",
            tags={"table": table},
            fields={
                "records_deleted": records_deleted,
                "retention_days": days,
                "cleanup_time_ms": self.delay_ms,
            },
        )
        return {"table": table, "records_deleted": records_deleted}
