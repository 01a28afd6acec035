from typing import Any

import structlog

from ...domain.entities import WorkType
from .base import WorkItemProcessor, require_int, require_str

logger = structlog.get_logger()


class ReportGenerationProcessor(WorkItemProcessor):
    """Generates a periodic report for a user."""

    delay_ms = 300

    @property
    def work_type(self) -> WorkType:
        return WorkType.REPORT_GENERATION

    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info("Processing report generation", payload=payload)
        report_type = require_str(payload, "reportType")
        user_id = require_int(payload, "userId")

        await self._simulate_work()
        report_size_kb = self._rng.randint(100, 1099)
        logger.info(
            "Generated report",
            report_type=report_type,
            user_id=user_id,
            report_size_kb=report_size_kb,
        )

        self._metrics.write_point(
            "report_generation",
            tags={"report_type": report_type},
            fields={
                "user_id": user_id,
                "report_size_kb": report_size_kb,
                "generation_time_ms": self.delay_ms,
            },
        )
        return {"report_type": report_type, "report_size_kb": report_size_kb}
