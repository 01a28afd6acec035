from typing import Any

import structlog

from ...domain.entities import WorkType
from .base import WorkItemProcessor, require_str

logger = structlog.get_logger()


class EmailNotificationProcessor(WorkItemProcessor):
    """Sends a templated email. Delivery is simulated."""

    delay_ms = 200

    @property
    def work_type(self) -> WorkType:
        return WorkType.EMAIL_NOTIFICATION

    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.info("Processing email notification", template=payload.get("template"))
        email = require_str(payload, "email")
        template = require_str(payload, "template")

        await self._simulate_work()
        logger.info("Email notification sent", template=template)

        self._metrics.write_point(
            "email_notifications",
            tags={"template": template, "status": "sent"},
            fields={"recipient": email, "delivery_time_ms": self.delay_ms},
        )
        return {"template": template, "delivery_time_ms": self.delay_ms}
