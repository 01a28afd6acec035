"""
Step pipeline stages: process -> validate -> notify.

Each stage takes the document produced by the previous one and returns it
enriched with new top-level fields; nothing is removed. Sequencing the
stages is left to the external step orchestrator.
"""

import asyncio
import random
import string
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any

import structlog

from ...domain.exceptions import StageError
from ...utils import utc_now_iso

logger = structlog.get_logger()

PROCESS_DELAY_MS = 1000
VALIDATE_DELAY_MS = 500
NOTIFY_DELAY_MS = 300

_ID_ALPHABET = string.digits + string.ascii_lowercase


def _input_document(event: dict[str, Any]) -> dict[str, Any]:
    """Stages accept either a bare document or one wrapped in ``data``."""
    data = event.get("data")
    return data if isinstance(data, dict) else event


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class _Stage(ABC):
    name = "Stage"
    delay_ms = 0

    def __init__(self, delay_scale: float = 1.0) -> None:
        self._delay_scale = delay_scale

    async def run(self, event: dict[str, Any]) -> dict[str, Any]:
        try:
            if self._delay_scale > 0:
                await asyncio.sleep(self.delay_ms / 1000 * self._delay_scale)
            return self._apply(event)
        except Exception as e:
            logger.error(f"{self.name} failed", error=str(e))
            raise StageError(self.name, str(e)) from e

    @abstractmethod
    def _apply(self, event: dict[str, Any]) -> dict[str, Any]:
        """Return the enriched document."""
        ...


class ProcessStage(_Stage):
    """
    Simulated processing.

    recordCount and processedRecords are drawn independently, so the
    consistency check in ValidateStage can fail on a processed document.
    """

    name = "Processing"
    delay_ms = PROCESS_DELAY_MS

    def __init__(self, delay_scale: float = 1.0, rng: random.Random | None = None) -> None:
        super().__init__(delay_scale)
        self._rng = rng or random.Random()

    def _apply(self, event: dict[str, Any]) -> dict[str, Any]:
        document = {
            **_input_document(event),
            "processedAt": utc_now_iso(),
            "processedBy": "step-processor",
            "status": "processed",
            "result": {
                "recordCount": self._rng.randint(1, 1000),
                "processedRecords": self._rng.randint(1, 950),
            },
        }
        logger.info("Processing completed", result=document["result"])
        return document


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: str


class ValidateStage(_Stage):
    """Checks the processing result for plausibility."""

    name = "Validation"
    delay_ms = VALIDATE_DELAY_MS

    @staticmethod
    def checks(result: Any) -> list[CheckResult]:
        result = result if isinstance(result, dict) else {}
        record_count = _number(result.get("recordCount"))
        processed = _number(result.get("processedRecords"))

        count_ok = record_count is not None and record_count > 0
        processed_ok = processed is not None and processed > 0
        consistent = record_count is not None and processed is not None and processed <= record_count

        return [
            CheckResult(
                "record_count_check",
                count_ok,
                "Record count is valid" if count_ok else "Invalid record count",
            ),
            CheckResult(
                "processed_records_check",
                processed_ok,
                "Processed records count is valid" if processed_ok else "Invalid processed records count",
            ),
            CheckResult(
                "consistency_check",
                consistent,
                "Data consistency check passed" if consistent else "Data consistency check failed",
            ),
        ]

    def _apply(self, event: dict[str, Any]) -> dict[str, Any]:
        data = _input_document(event)
        checks = self.checks(data.get("result"))
        is_valid = all(c.passed for c in checks)

        document = {
            **data,
            "validatedAt": utc_now_iso(),
            "validatedBy": "step-validator",
            "isValid": is_valid,
            "validationResult": {"checks": [asdict(c) for c in checks]},
        }
        logger.info(
            "Validation completed",
            is_valid=is_valid,
            failed_checks=[c.name for c in checks if not c.passed],
        )
        return document


class NotifyStage(_Stage):
    """Terminal sink: emits a notification about the pipeline outcome."""

    name = "Notification"
    delay_ms = NOTIFY_DELAY_MS

    def __init__(self, delay_scale: float = 1.0, rng: random.Random | None = None) -> None:
        super().__init__(delay_scale)
        self._rng = rng or random.Random()

    def _notification_id(self) -> str:
        suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(9))
        return f"notif-{int(time.time() * 1000)}-{suffix}"

    def _apply(self, event: dict[str, Any]) -> dict[str, Any]:
        status = event.get("status") or "info"
        data = event.get("data") if isinstance(event.get("data"), dict) else {}

        notification = {
            "notificationId": self._notification_id(),
            "timestamp": utc_now_iso(),
            "status": status,
            "message": event.get("message") or "Notification sent",
            "sentBy": "step-notifier",
        }

        if status == "success":
            result = data.get("result") if isinstance(data.get("result"), dict) else {}
            logger.info(
                "SUCCESS NOTIFICATION",
                **notification,
                summary={
                    "recordsProcessed": result.get("processedRecords") or 0,
                    "totalRecords": result.get("recordCount") or 0,
                    "validationPassed": bool(data.get("isValid")),
                },
            )
        elif status == "error":
            validation = data.get("validationResult")
            checks = validation.get("checks") if isinstance(validation, dict) else None
            logger.error(
                "ERROR NOTIFICATION",
                **notification,
                error=event.get("error") or "Unknown error occurred",
                failure_details=[
                    c
                    for c in (checks if isinstance(checks, list) else [])
                    if isinstance(c, dict) and not c.get("passed")
                ],
            )
        else:
            logger.info("INFO NOTIFICATION", **notification)

        logger.info("Notification sent successfully", notification_id=notification["notificationId"])
        return {**notification, "delivered": True}
