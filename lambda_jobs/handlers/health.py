"""API Gateway health check backed by a database round-trip."""

import asyncio
import json
from typing import Any

import structlog

from ..application.services import HealthCheckService
from ..config import settings
from ..container import Container, get_container
from ..infrastructure.logging import Timer, configure_logging
from ..infrastructure.persistence import Database, PostgresHealthCheckRepository
from ..utils import utc_now_iso
from .context import bind_invocation

configure_logging(settings.service_name)

logger = structlog.get_logger()

RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


async def check(event: dict[str, Any], context: Any, container: Container) -> dict[str, Any]:
    """Run the health check; database errors become a 500 response."""
    bind_invocation(context)
    logger.info("Health check requested", path=event.get("path"))

    rows = None
    error: str | None = None
    database: Database | None = None

    try:
        with Timer() as t:
            database = container.open_database()
            await database.create_tables()
            async with database.session() as session:
                rows = await HealthCheckService(PostgresHealthCheckRepository(session)).run()
        logger.info("Database check completed", latency_ms=t.duration_ms)
    except Exception as e:
        logger.error("Database error", error=str(e))
        error = str(e)
    finally:
        if database is not None:
            try:
                await database.close()
                logger.info("Database connection closed")
            except Exception as e:
                logger.error("Error closing database connection", error=str(e))

    body = {
        "message": "Database connection failed" if error else "Hello from Lambda with Database!",
        "timestamp": utc_now_iso(),
        "environment": container.settings.environment,
        "database": {
            "connected": error is None,
            "error": error,
            "query_results": (
                [
                    {"id": r.id, "timestamp": r.timestamp.isoformat(), "message": r.message}
                    for r in rows
                ]
                if rows is not None
                else None
            ),
        },
    }
    return {
        "statusCode": 500 if error else 200,
        "headers": RESPONSE_HEADERS,
        "body": json.dumps(body),
    }


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler for API Gateway proxy events."""
    return asyncio.run(check(event, context, get_container()))
