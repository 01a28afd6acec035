from typing import Any

import structlog

from ...domain.entities import WorkType
from .base import WorkItemProcessor, require_int, require_str

logger = structlog.get_logger()


class BackupTaskProcessor(WorkItemProcessor):
    """Backs up a database with a retention policy."""

    delay_ms = 500

    @property
    def work_type(self) -> WorkType:
        return WorkType.BACKUP_TASK

    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info("Processing backup task", payload=payload)
        database = require_str(payload, "database")
        retention = require_int(payload, "retention")

        await self._simulate_work()
        backup_size_mb = self._rng.randint(1000, 10999)
        logger.info(
            "Backup completed",
            database=database,
            retention_days=retention,
            backup_size_mb=backup_size_mb,
        )

        self._metrics.write_point(
            "database_backup",
            tags={"database": database},
            fields={
                "backup_size_mb": backup_size_mb,
                "retention_days": retention,
                "backup_time_ms": self.delay_ms,
            },
        )
        return {"database": database, "backup_size_mb": backup_size_mb}
