"""Step Functions task handlers for the process -> validate -> notify pipeline."""

import asyncio
from typing import Any

import structlog

from ..application.services import NotifyStage, ProcessStage, ValidateStage
from ..config import settings
from ..infrastructure.logging import configure_logging
from .context import bind_invocation

configure_logging(settings.service_name)

logger = structlog.get_logger()


def process_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Processing task: attaches a simulated result to the document."""
    bind_invocation(context)
    logger.info("Processing data", payload=event)
    return asyncio.run(ProcessStage(delay_scale=settings.simulated_delay_scale).run(event))


def validate_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Validation task: attaches named checks and an overall verdict."""
    bind_invocation(context)
    logger.info("Validating data", payload=event)
    return asyncio.run(ValidateStage(delay_scale=settings.simulated_delay_scale).run(event))


def notify_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Notification task: terminal sink for the pipeline outcome."""
    bind_invocation(context)
    logger.info("Sending notification", payload=event)
    return asyncio.run(NotifyStage(delay_scale=settings.simulated_delay_scale).run(event))
