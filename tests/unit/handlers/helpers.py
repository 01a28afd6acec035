import json
from unittest.mock import AsyncMock, MagicMock

from lambda_jobs.config import Settings
from lambda_jobs.container import Container
from tests.conftest import InMemoryQueue


def make_container(metrics, publisher=None, database=None, **overrides) -> Container:
    options = {
        "environment": "test",
        "sqs_queue_url": "https://sqs.us-east-1.amazonaws.com/123/work-items",
        "simulated_delay_scale": 0,
        **overrides,
    }
    return Container(
        settings=Settings(**options),
        secrets=MagicMock(),
        publisher=publisher or InMemoryQueue(),
        metrics_factory=lambda settings, secrets: metrics,
        database_factory=lambda settings: database,
    )


def mock_database(session=None):
    """Database double whose session() is an async context manager."""
    session = session or MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()

    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=session)
    session_cm.__aexit__ = AsyncMock(return_value=None)

    database = MagicMock()
    database.create_tables = AsyncMock()
    database.close = AsyncMock()
    database.session.return_value = session_cm
    return database, session


def sqs_event(*bodies: dict) -> dict:
    return {
        "Records": [
            {"messageId": f"m-{i}", "body": json.dumps(body)}
            for i, body in enumerate(bodies, start=1)
        ]
    }
