from typing import Any

import structlog

from ...domain.entities import WorkType
from .base import WorkItemProcessor, require_int, require_str

logger = structlog.get_logger()


class DataProcessingProcessor(WorkItemProcessor):
    """Applies a user data action (currently only profile updates)."""

    delay_ms = 100

    @property
    def work_type(self) -> WorkType:
        return WorkType.DATA_PROCESSING

    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info("Processing data item", payload=payload)
        action = require_str(payload, "action")

        if action != "update_profile":
            logger.info("No handling for data action", action=action)
            return {"action": action, "processed": False}

        user_id = require_int(payload, "userId")
        await self._simulate_work()
        logger.info("Updated profile", user_id=user_id)

        self._metrics.write_point(
            "user_activity",
            tags={"action": action},
            fields={"user_id": user_id, "processing_time_ms": self.delay_ms},
        )
        return {"action": action, "processed": True, "user_id": user_id}
